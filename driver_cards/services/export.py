from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Sequence
from typing import Protocol

from ..models.contributor import ContributorRecord
from ..models.field_key import SENTINEL
from .payload import build_qr_payload

"""Card archive packaging.

Rendering a card (layout, rasterization, PDF) is delegated to a CardRenderer;
this module only names the files and packs them:

    cartes-b2-individuelles/carte-b2-<npc>.<ext>   one per card
    toutes-les-cartes-b2.<ext>                     every card in one document
"""

__all__ = [
    "ExportError",
    "CardRenderer",
    "PayloadTextRenderer",
    "card_filename",
    "build_card_archive",
]

CARDS_FOLDER = "cartes-b2-individuelles"
DECK_BASENAME = "toutes-les-cartes-b2"


class ExportError(Exception):
    """Raised when cards cannot be rendered or packaged."""


class CardRenderer(Protocol):
    extension: str

    def render_card(self, record: ContributorRecord) -> bytes: ...

    def render_deck(self, records: Sequence[ContributorRecord]) -> bytes: ...


class PayloadTextRenderer:
    """Renders the QR payload as UTF-8 text. Used when no graphical renderer is wired in."""

    extension = "txt"

    def render_card(self, record: ContributorRecord) -> bytes:
        return build_qr_payload(record).encode("utf-8")

    def render_deck(self, records: Sequence[ContributorRecord]) -> bytes:
        return "\n\n".join(build_qr_payload(r) for r in records).encode("utf-8")


def card_filename(record: ContributorRecord, extension: str) -> str:
    stem = record.npc if record.npc != SENTINEL else record.id
    # NPC values sometimes contain '/' (e.g. "NPC/2024/001")
    stem = stem.replace("/", "-").replace("\\", "-")
    return f"carte-b2-{stem}.{extension}"


def build_card_archive(
    records: Sequence[ContributorRecord],
    renderer: CardRenderer,
    on_card: Callable[[], None] | None = None,
) -> bytes:
    """Render every card plus the deck and return the zip archive bytes.

    ``on_card`` is called once per rendered card and once for the deck.
    """
    if not records:
        raise ExportError("Aucune carte à exporter")
    buf = io.BytesIO()
    try:
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            used: set[str] = set()
            for record in records:
                name = card_filename(record, renderer.extension)
                if name in used:
                    # two cards sharing an NPC: fall back to the unique id
                    name = f"carte-b2-{record.id}.{renderer.extension}"
                used.add(name)
                zf.writestr(f"{CARDS_FOLDER}/{name}", renderer.render_card(record))
                if on_card is not None:
                    on_card()
            zf.writestr(f"{DECK_BASENAME}.{renderer.extension}", renderer.render_deck(records))
            if on_card is not None:
                on_card()
    except ExportError:
        raise
    except Exception as e:
        # renderer implementations are third party code
        raise ExportError(f"Erreur lors de l'export ZIP: {e}") from e
    return buf.getvalue()
