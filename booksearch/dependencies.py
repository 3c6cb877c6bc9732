"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

The search pipeline is built once in the application lifespan and kept
on app.state; routes receive it through SearchPipelineDep, which tests
replace via app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends, Request

from booksearch.services.pipeline import SearchPipeline


def get_search_pipeline(request: Request) -> SearchPipeline:
    """
    Provide the application-wide search pipeline.

    Returns:
        The SearchPipeline created at startup
    """
    return request.app.state.pipeline


# Instead of writing:
#   async def search(pipeline: SearchPipeline = Depends(get_search_pipeline)):
#
# You can write:
#   async def search(pipeline: SearchPipelineDep):
SearchPipelineDep = Annotated[SearchPipeline, Depends(get_search_pipeline)]
