"""Landing page and protected page entrypoints."""

from __future__ import annotations

import json
from html import escape
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from smart_recipe.api.auth import request_context
from smart_recipe.domain.landing import NAVIGATION, LandingState, LandingView
from smart_recipe.services.data_gate import PageRedirect
from smart_recipe.services.landing import resolve_content

if TYPE_CHECKING:
    from smart_recipe.containers import AppContainer

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def landing(
    request: Request, view: str | None = None, menu: str | None = None
) -> HTMLResponse:
    """Public landing page; signed-in visitors are turned away."""
    container: AppContainer = request.app.state.container
    if container.session_resolver.resolve(request_context(request)) is not None:
        return HTMLResponse(
            _PAGE_HTML.format(
                title="Inaccessible Page",
                body=(
                    "<h1>Inaccessible Page</h1>"
                    "<a href='/home'>Go to your recipes</a>"
                ),
            ),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    state = LandingState(view=LandingView.parse(view), mobile_menu_open=menu == "open")
    content, state = resolve_content(state, container.settings.about_url)
    return HTMLResponse(
        _PAGE_HTML.format(
            title="Smart Recipe Generator",
            body=_render_landing(state, content.view, content.external_url),
        )
    )


@router.get("/home")
async def home(request: Request) -> Response:
    """Protected recipe page: initial props or a redirect to the landing page."""
    container: AppContainer = request.app.state.container
    resource_path = "api/get-recipes"
    if request.url.query:
        resource_path = f"{resource_path}?{request.url.query}"
    result = await container.data_gate.load_initial_props(
        request_context(request), resource_path, "recipes"
    )
    if isinstance(result, PageRedirect):
        return RedirectResponse(
            result.destination,
            status_code=(
                status.HTTP_308_PERMANENT_REDIRECT
                if result.permanent
                else status.HTTP_307_TEMPORARY_REDIRECT
            ),
        )
    return JSONResponse({"props": result.props})


def _render_landing(
    state: LandingState, view: LandingView, external_url: str | None
) -> str:
    links = "".join(
        f"<a href='/?view={item.value}'>{escape(name)}</a>" for name, item in NAVIGATION
    )
    menu = (
        f"<div class='mobile-menu'>{links}<a href='/'>Close</a></div>"
        if state.mobile_menu_open
        else "<a class='menu-button' href='/?menu=open'>Menu</a>"
    )
    parts = [
        f"<nav>{links}{menu}",
        "<a href='/auth/signin/google'>Log in With Google &rarr;</a></nav>",
        _SECTIONS[view],
    ]
    if external_url:
        script_url = json.dumps(external_url).replace("</", "<\\/")
        href = escape(external_url, quote=True)
        parts.append(
            f"<script>window.open({script_url}, '_blank');</script>"
            f"<noscript><a href='{href}' target='_blank'>About</a></noscript>"
        )
    return "".join(parts)


_SECTIONS = {
    LandingView.PRODUCT: (
        "<section id='product'><h2>Product</h2>"
        "<p>Turn the ingredients you have into recipes worth sharing.</p>"
        "<a href='/'>Back</a></section>"
    ),
    LandingView.FEATURES: (
        "<section id='features'><h2>Features</h2>"
        "<ul><li>AI-generated recipes</li><li>Likes and a community feed</li>"
        "<li>Narrated instructions</li></ul>"
        "<a href='/'>Back</a></section>"
    ),
    LandingView.DEFAULT: (
        "<section id='landing'><h1>Smart Recipe Generator</h1>"
        "<p>Discover, create and share recipes.</p></section>"
    ),
    LandingView.ABOUT: "",
}

_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title}</title>
  </head>
  <body>{body}</body>
</html>
"""
