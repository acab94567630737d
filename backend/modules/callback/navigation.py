"""
Navigation seam between the callback flow and the UI shell.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Navigation


@runtime_checkable
class INavigator(Protocol):
    """Applies a navigation request. Called at most once per applied flow."""

    def navigate(self, navigation: Navigation) -> None:
        ...


class RecordingNavigator(INavigator):
    """
    Navigator that records requests for the caller to act on.

    The HTTP layer turns the last recorded navigation into a response.
    """

    def __init__(self) -> None:
        self.navigations: list[Navigation] = []

    def navigate(self, navigation: Navigation) -> None:
        self.navigations.append(navigation)

    @property
    def last(self) -> Optional[Navigation]:
        return self.navigations[-1] if self.navigations else None
