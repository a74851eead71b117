from dataclasses import dataclass
from typing import Dict, List, Optional
from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.text import Text
from rich.theme import Theme

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "warn": "bold yellow",
    "err":  "bold red",
    "info": "bold cyan",
})
console = Console(theme=custom_theme)


def info_panel(title: str, msg: str, style: str = "cyan", out: Optional[Console] = None):
    (out or console).print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style=style))


def warn_panel(title: str, msg: str, out: Optional[Console] = None):
    info_panel(title, msg, style="yellow", out=out)


def error_panel(title: str, msg: str, out: Optional[Console] = None):
    info_panel(title, msg, style="red", out=out)


def success_panel(title: str, msg: str, out: Optional[Console] = None):
    info_panel(title, msg, style="green", out=out)


def print_rule(title: Optional[str] = None):
    if title:
        console.rule(f"[info]{title}[/info]")
    else:
        console.rule()


# ========== Notifications ==========
@dataclass
class Notification:
    icon: str
    title: str
    text: str


class Notifier:
    """One notification at a time, each replacing the previous one.

    The loading notification is a spinner that stays up until the next
    notification is shown.
    """

    def __init__(self, out: Optional[Console] = None):
        self.out = out or console
        self.history: List[Notification] = []
        self._status: Optional[Status] = None

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None

    @property
    def loading(self) -> bool:
        return self._status is not None

    def _replace(self, note: Notification):
        self.close()
        self.history.append(note)

    def close(self):
        if self._status is not None:
            self._status.stop()
            self._status = None

    def show_loading(self, title: str, text: str):
        self._replace(Notification("loading", title, text))
        self._status = self.out.status(f"[info]{title}[/info] {text}", spinner="dots")
        self._status.start()

    def show_success(self, title: str, text: str):
        self._replace(Notification("success", title, text))
        success_panel(title, text, out=self.out)

    def show_warning(self, title: str, text: str):
        self._replace(Notification("warning", title, text))
        warn_panel(title, text, out=self.out)

    def show_error(self, title: str, text: str, details: Optional[Dict[str, str]] = None):
        self._replace(Notification("error", title, text))
        if details:
            text = text + "\n\n" + "\n".join(f" - {name}: {msg}" for name, msg in details.items())
        error_panel(title, text, out=self.out)
