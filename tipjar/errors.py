"""Exceptions raised by the tip engine."""


class TipError(Exception):
    """Base class for tip engine failures."""


class TipConsistencyError(TipError):
    """The display state and the engine's currently shown tip disagree."""


class TipAlreadyShownError(TipConsistencyError):
    """A tip was selected while another one is still on screen."""

    def __init__(self, shown_id: str, selected_id: str):
        self.shown_id = shown_id
        self.selected_id = selected_id
        super().__init__(
            f"tip {selected_id!r} selected while tip {shown_id!r} is still shown"
        )


class TipContractError(TipError):
    """A custom show_tip hook returned something other than True, False or None."""


class CatalogueError(TipError):
    """A tip catalogue could not be parsed."""
