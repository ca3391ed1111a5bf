"""
MiniNote Backend - Static Asset Routes
=======================================

What:  Byte-for-byte passthrough of the editor's front-end files.
How:   One GET route per named asset, plus /js/{file} for vendored scripts
       under STATIC_ROOT/public/js. Content type is guessed from the name.
       Missing files are 404.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from mininote.dependencies import get_static_assets
from mininote.services.assets import NAMED_ASSETS, StaticAssets, guess_media_type

router = APIRouter(tags=["Static"])


def _named_asset_endpoint(asset_name: str):
    async def serve_asset(assets: StaticAssets = Depends(get_static_assets)) -> FileResponse:
        path = await assets.named(asset_name)
        return FileResponse(path=str(path), media_type=guess_media_type(path))

    serve_asset.__name__ = f"serve_{asset_name.replace('.', '_')}"
    return serve_asset


for _asset in NAMED_ASSETS:
    router.add_api_route(
        f"/{_asset}",
        _named_asset_endpoint(_asset),
        methods=["GET"],
        include_in_schema=False,
    )


@router.get("/js/{file_name:path}", include_in_schema=False)
async def serve_script(
    file_name: str,
    assets: StaticAssets = Depends(get_static_assets),
) -> FileResponse:
    path = await assets.script(file_name)
    return FileResponse(path=str(path), media_type=guess_media_type(path))
