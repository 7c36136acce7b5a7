"""Landing page content selection."""

from dataclasses import dataclass

from smart_recipe.domain.landing import LandingState, LandingView


@dataclass(frozen=True)
class LandingContent:
    """What the landing page should show for a given state."""

    view: LandingView
    external_url: str | None = None


def resolve_content(
    state: LandingState, about_url: str
) -> tuple[LandingContent, LandingState]:
    """Return the content to render and the state to keep afterwards.

    ``about`` opens an external page and falls back to the default section.
    """
    if state.view is LandingView.ABOUT:
        return (
            LandingContent(view=LandingView.DEFAULT, external_url=about_url),
            state.reset(),
        )
    return LandingContent(view=state.view), state
