"""API endpoints listing endpoint.

Built from the app's OpenAPI schema; pages registered with
include_in_schema=False stay out of the listing.
"""

import logging
from collections import defaultdict
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meta"])

# Tags left out of the listing (internal/docs/pages)
EXCLUDED_TAGS = {"meta", "views"}
HTTP_METHODS = {"get", "post", "put", "patch", "delete"}


def requires_auth(operation: dict) -> bool:
    """True if the operation declares a security requirement (Bearer token)."""
    return bool(operation.get("security"))


def group_endpoints_by_tag(endpoints: list[dict]) -> dict[str, list[dict]]:
    """Group endpoints by their first tag ("other" if untagged), dropping EXCLUDED_TAGS.

    Endpoints within each group are sorted by (path, method).
    """
    mapping = defaultdict(list)

    for ep in endpoints:
        tag = ep["tags"][0] if ep["tags"] else "other"
        if tag not in EXCLUDED_TAGS:
            mapping[tag].append(ep)

    for tag in mapping:
        mapping[tag].sort(key=lambda ep: (ep["path"], ep["method"]))

    return mapping


def get_sorted_tags(grouped: dict[str, list[dict]]) -> list[str]:
    """Return tags sorted alphabetically, with 'other' at the end."""
    tags = sorted(tag for tag in grouped if tag != "other")
    if "other" in grouped:
        tags.append("other")
    return tags


def format_endpoint(ep: dict) -> str:
    """Format a single endpoint as HTML."""
    summary = ep["summary"].split("\n")[0].strip() if ep["summary"] else ""
    summary_html = f'<div class="summary">{summary}</div>' if summary else ""
    lock_html = '<span class="lock">Bearer</span>' if ep.get("protected") else ""
    return (
        f'<div class="endpoint"><span class="method {ep["method"]}">{ep["method"]}</span>'
        f'<span class="path">{ep["path"]}</span>{lock_html}{summary_html}</div>'
    )


def format_tag_title(tag: str) -> str:
    """Convert tag name to display title."""
    return f"{tag.title()} Endpoints"


def collect_endpoints(openapi_schema: dict) -> list[dict]:
    endpoints = []
    for path, operations in openapi_schema.get("paths", {}).items():
        for method, operation in operations.items():
            if method not in HTTP_METHODS:
                continue
            endpoints.append({
                'method': method.upper(),
                'path': path,
                'summary': operation.get('description') or operation.get('summary') or '',
                'tags': operation.get('tags') or [],
                'protected': requires_auth(operation),
            })
    return endpoints


@router.get("/endpoints")
def list_endpoints(request: Request):
    """List all implemented API endpoints as an HTML page."""
    grouped = group_endpoints_by_tag(collect_endpoints(request.app.openapi()))

    sections_html = ""
    for tag in get_sorted_tags(grouped):
        eps_html = ''.join(format_endpoint(ep) for ep in grouped[tag])
        sections_html += f"""
        <h2>{format_tag_title(tag)}</h2>
        {eps_html}
"""

    html = f"""<!DOCTYPE html>
<html>
<head>
    <title>Profile QR API - Endpoints</title>
    <style>
        body {{ font-family: system-ui, -apple-system, sans-serif; margin: 40px; background: #f5f5f5; }}
        .container {{ max-width: 1200px; margin: 0 auto; background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
        h1 {{ color: #333; border-bottom: 2px solid #007bff; padding-bottom: 10px; }}
        h2 {{ color: #555; margin-top: 30px; }}
        .endpoint {{ margin: 10px 0; padding: 12px; background: #f9f9f9; border-left: 4px solid #007bff; border-radius: 4px; }}
        .method {{ display: inline-block; padding: 4px 8px; border-radius: 4px; font-weight: bold; font-size: 12px; margin-right: 10px; }}
        .GET {{ background: #61affe; color: white; }}
        .POST {{ background: #49cc90; color: white; }}
        .PUT {{ background: #fca130; color: white; }}
        .path {{ font-family: monospace; color: #333; font-size: 14px; }}
        .lock {{ margin-left: 10px; font-size: 11px; color: #b45309; border: 1px solid #b45309; border-radius: 4px; padding: 1px 6px; }}
        .summary {{ color: #666; font-size: 13px; margin-top: 4px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Profile QR API - Implemented Endpoints</h1>
        {sections_html}
        <p style="margin-top: 40px; color: #999; font-size: 12px;">
            Routes marked Bearer need <code>Authorization: Bearer &lt;token&gt;</code>.
            Visit <a href="/docs">/docs</a> for interactive API documentation.
        </p>
    </div>
</body>
</html>"""

    return HTMLResponse(content=html)
