"""Navigation state for the public landing page."""

from dataclasses import dataclass, replace
from enum import Enum


class LandingView(str, Enum):
    """Named sections the landing page can display."""

    PRODUCT = "product"
    FEATURES = "features"
    ABOUT = "about"
    DEFAULT = "default"

    @classmethod
    def parse(cls, raw: str | None) -> "LandingView":
        """Map a raw query value to a view, falling back to the default."""
        for view in cls:
            if view.value == raw:
                return view
        return cls.DEFAULT


NAVIGATION: tuple[tuple[str, LandingView], ...] = (
    ("Product", LandingView.PRODUCT),
    ("Features", LandingView.FEATURES),
    ("About", LandingView.ABOUT),
)


@dataclass(frozen=True)
class LandingState:
    """Selected view and mobile menu visibility."""

    view: LandingView = LandingView.DEFAULT
    mobile_menu_open: bool = False

    def select(self, view: LandingView) -> "LandingState":
        return replace(self, view=view)

    def select_from_menu(self, view: LandingView) -> "LandingState":
        """Select a view from the mobile menu, which closes the menu."""
        return replace(self, view=view, mobile_menu_open=False)

    def reset(self) -> "LandingState":
        return replace(self, view=LandingView.DEFAULT)

    def open_menu(self) -> "LandingState":
        return replace(self, mobile_menu_open=True)

    def close_menu(self) -> "LandingState":
        return replace(self, mobile_menu_open=False)
