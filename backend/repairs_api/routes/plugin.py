"""
Repairs API — Assistant Plugin Manifest
========================================

What:  Serves /.well-known/ai-plugin.json so chat assistants can discover the API,
       and redirects / to the Swagger UI.
How:   The manifest is built from the app's settings on each request; its
       `api.url` points at the generated OpenAPI document.
"""

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from repairs_api.config import Settings

router = APIRouter(tags=["Plugin"])


def build_manifest(config: Settings, base_url: str) -> dict:
    """Plugin manifest for a deployment reachable at `base_url`."""
    logo_url = f"{base_url}{config.logo_path}" if config.logo_path else ""

    return {
        "schema_version": "v1",
        "name_for_human": config.plugin_name,
        "name_for_model": config.plugin_name.lower().replace(" ", "_"),
        "description_for_human": config.plugin_description,
        "description_for_model": config.plugin_description,
        "auth": {"type": "none"},
        "api": {
            "type": "openapi",
            "url": f"{base_url}/openapi.json",
            "is_user_authenticated": False,
        },
        "logo_url": logo_url,
        "contact_email": config.contact_email,
        "legal_info_url": f"{base_url}/api-docs",
    }


@router.get("/.well-known/ai-plugin.json", include_in_schema=False)
async def plugin_manifest(request: Request) -> dict:
    config: Settings = request.app.state.settings
    # Fall back to the host the request came in on when BASE_URL is unset
    base_url = config.base_url or str(request.base_url).rstrip("/")
    return build_manifest(config, base_url)


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url="/api-docs")
