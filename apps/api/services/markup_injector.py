"""Rewrite call-to-action elements in generated landing pages to a payment destination."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from config import settings

CLICKABLE_TAGS = ("a", "button")

# Attributes that only make sense on a form control and are dropped when a button becomes a link.
BUTTON_ONLY_ATTRIBUTES = {"type", "name", "value", "disabled", "onclick", "autofocus"}


@dataclass(frozen=True)
class CtaPolicy:
    action_words: Tuple[str, ...] = field(default_factory=lambda: tuple(settings.CTA_ACTION_WORDS))
    placeholder: str = field(default_factory=lambda: settings.PAYMENT_PLACEHOLDER)

    @classmethod
    def from_words(cls, words: Iterable[str], placeholder: Optional[str] = None) -> "CtaPolicy":
        normalized = tuple(w.strip().lower() for w in words if w and w.strip())
        return cls(
            action_words=normalized,
            placeholder=placeholder if placeholder is not None else settings.PAYMENT_PLACEHOLDER,
        )

    def matches(self, text: str) -> bool:
        lowered = (text or "").lower()
        return any(word.lower() in lowered for word in self.action_words)


def _link_attributes(button: Tag) -> dict:
    return {
        name: value
        for name, value in button.attrs.items()
        if name.lower() not in BUTTON_ONLY_ATTRIBUTES and not name.lower().startswith("form")
    }


def _button_to_link(soup: BeautifulSoup, button: Tag, destination: str) -> None:
    link = soup.new_tag("a")
    link.attrs.update(_link_attributes(button))
    link["href"] = destination
    for child in list(button.contents):
        link.append(child.extract())
    button.replace_with(link)


def inject_payment_link(markup: str, destination: str, *, policy: Optional[CtaPolicy] = None) -> str:
    """
    Point every call-to-action link/button in ``markup`` at ``destination``.

    Buttons whose text contains an action word become ``<a>`` elements with the
    same visual attributes and children; matching links keep their attributes
    and get a new ``href``. Any leftover placeholder token is substituted last.
    Markup without candidates is returned as-is apart from that substitution.
    """
    active_policy = policy or CtaPolicy()
    soup = BeautifulSoup(markup or "", "html.parser")

    rewrites = 0
    for element in soup.find_all(list(CLICKABLE_TAGS)):
        if not active_policy.matches(element.get_text()):
            continue
        if element.name == "button":
            # Links cannot nest: retarget the enclosing link instead.
            enclosing_link = element.find_parent("a")
            if enclosing_link is not None:
                enclosing_link["href"] = destination
            else:
                _button_to_link(soup, element, destination)
        else:
            element["href"] = destination
        rewrites += 1

    # Markup without rewrites is returned verbatim.
    rendered = str(soup) if rewrites else (markup or "")
    if active_policy.placeholder:
        rendered = rendered.replace(active_policy.placeholder, destination)
    return rendered
