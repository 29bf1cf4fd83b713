"""
Endpoints for bulk tile archives.
"""

from fastapi import APIRouter, Request, Response

from bulktiles.processing.bundler import BulkRequest

bulk_router = APIRouter(tags=["Bulk Tiles"])


@bulk_router.api_route(
    "/{source_id}/{z:int}/{x:int}/{y:int}.{ext}",
    methods=["GET", "HEAD"],
    summary="Download a tile and all of its descendants.",
    description="Packs every stored tile at `z`/`x`/`y` and below, down to the source's maximum zoom, into a tar archive. Supported extensions are 'tar', 'tar.gz', and 'tar.br'.",
)
async def get_bulk(
    source_id: str,
    z: int,
    x: int,
    y: int,
    ext: str,
    request: Request,
):
    """
    Build (or, for HEAD, size) the archive for one tile.

    HEAD requests are answered from the size cache when it already knows
    the length of this exact response; otherwise the archive is built as
    for GET and only its length is returned.
    """

    result = await request.app.bundler.run(
        BulkRequest(source_id=source_id, zoom=z, x=x, y=y, ext=ext),
        metadata_only=request.method == "HEAD",
    )

    if result.content is None:
        return Response(
            headers={"Content-Length": str(result.length)},
            media_type=result.format.media_type,
        )

    return Response(content=result.content, media_type=result.format.media_type)
