"""
Render endpoints.

This module exposes the render pipeline over HTTP. A document that cannot be
acquired is reported as absent output, not as an HTTP error.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from htmlview.services.render_pipeline import HTMLRenderPipeline
from htmlview.tree.models import RenderRequest

router = APIRouter()


class RenderResponse(BaseModel):
    document: Optional[Dict[str, Any]] = None
    warning: Optional[str] = None


def get_pipeline() -> HTMLRenderPipeline:
    return HTMLRenderPipeline()


@router.post("/render", response_model=RenderResponse)
async def render_document(
    request: RenderRequest,
    pipeline: HTMLRenderPipeline = Depends(get_pipeline)
):
    """
    Render an HTML document into a UI tree.

    Args:
        request: Document source (html or uri) and rendering options
        pipeline: Render pipeline

    Returns:
        RenderResponse: The rendered document, or a warning when nothing was rendered
    """
    rendered = await pipeline.render(request)
    if rendered is None:
        return RenderResponse(warning="No document could be rendered from the given html or uri.")
    return RenderResponse(document=rendered.to_dict())
