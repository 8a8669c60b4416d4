"""Built-in image card."""

from typing import Optional

from mobiledoc_markdown.plugins.base import Card, CardArgument


def render_image_card(arg: CardArgument) -> Optional[str]:
    """Render the payload's ``src`` as a Markdown image."""
    payload = arg.payload or {}
    src = payload.get("src") if isinstance(payload, dict) else None
    if src:
        return f"![]({src})"
    return None


IMAGE_CARD = Card(name="image-card", render=render_image_card)
