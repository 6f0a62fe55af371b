"""Terminal message boxes with dismiss hooks, rendered with rich."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from tipjar.display.colors import COLORS
from tipjar.engine.models import ActionButton

logger = logging.getLogger(__name__)

DISMISS_START = "dismissStart"
DISMISS_END = "dismissEnd"

Hook = Callable[[Dict[str, Any]], None]


class UnknownMessageTypeError(KeyError):
    """No message box has been registered for this kind."""


@dataclass
class MessageElement:
    """A message box. ``dataset`` carries arbitrary tags such as a tip id."""
    name: str
    title: str = "Tip"
    visible: bool = False
    text: str = ""
    dataset: Dict[str, str] = field(default_factory=dict)


class MessageService:
    """Shows one message per registered kind and reports dismissals to hooks."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self._elements: Dict[str, MessageElement] = {}
        self._hooks: Dict[str, Dict[str, List[Hook]]] = {}

    def register_message_type(self, kind: str, element: Optional[MessageElement] = None):
        """Register a message box for ``kind``."""
        self._elements[kind] = element or MessageElement(name=kind)
        self._hooks.setdefault(kind, {})

    def get_element(self, kind: str) -> MessageElement:
        try:
            return self._elements[kind]
        except KeyError:
            raise UnknownMessageTypeError(kind)

    def set_hook(self, kind: str, event_name: str, callback: Hook):
        """Call ``callback`` whenever ``event_name`` happens for ``kind``."""
        self.get_element(kind)
        self._hooks[kind].setdefault(event_name, []).append(callback)

    def show_message(
        self,
        kind: str,
        text: str,
        allow_dismiss: bool = True,
        action_button: Optional[ActionButton] = None,
    ):
        """Render a message in the box registered for ``kind``."""
        element = self.get_element(kind)
        element.text = text
        element.visible = True

        body = Text(text)
        if action_button is not None:
            body.append("\n\n")
            body.append(f"→ {action_button.text}", style=f"bold {COLORS['primary']}")
            body.append(f"  {action_button.action}", style="dim")

        subtitle = "[dim]dismissable[/dim]" if allow_dismiss else None
        self.console.print(
            Panel(
                body,
                title=f"[{COLORS['accent']}]{element.title}[/]",
                title_align="left",
                subtitle=subtitle,
                subtitle_align="right",
                border_style=COLORS["muted"],
                padding=(0, 1),
            )
        )

    def dismiss(self, kind: str):
        """Dismiss the message of ``kind``, notifying the dismiss hooks."""
        element = self.get_element(kind)
        if not element.visible:
            logger.debug(f"Dismiss of hidden message {kind} ignored")
            return
        self._fire(kind, DISMISS_START, element)
        element.visible = False
        self._fire(kind, DISMISS_END, element)

    def hide(self, kind: str):
        """Hide a message without notifying anyone."""
        self.get_element(kind).visible = False

    def _fire(self, kind: str, event_name: str, element: MessageElement):
        for callback in self._hooks.get(kind, {}).get(event_name, []):
            callback({"el_message": element})
