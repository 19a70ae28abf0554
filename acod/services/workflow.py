# acod/services/workflow.py
"""
Approval state machine for content items.

Each item carries two independent tracks:

  approved_guidelines (theme / brief)
      indefinido -> pendente
      pendente   -> aprovado, rejeitado
      aprovado   -> rejeitado, pendente
      rejeitado  -> pendente

  content_status (production / finished asset)
      pendente             -> em_producao, aguardando_aprovacao, aprovado, rejeitado
      em_producao          -> aguardando_aprovacao, aprovado, rejeitado, pendente
      aguardando_aprovacao -> aprovado, rejeitado, em_producao, pendente
      aprovado             -> publicado, rejeitado, pendente
      rejeitado            -> pendente, em_producao
      publicado            -> (final)

Setting a track to its current value is always allowed and changes
nothing, which is what makes a repeated rejection legal.
"""
from datetime import date

from acod.models.enums import ContentStatus, GuidelineApproval, Track
from acod.services.calendar import format_short_date

G = GuidelineApproval
C = ContentStatus

GUIDELINE_TRANSITIONS: dict[GuidelineApproval, set[GuidelineApproval]] = {
    G.UNDEFINED: {G.PENDING},
    G.PENDING: {G.APPROVED, G.REJECTED},
    G.APPROVED: {G.PENDING, G.REJECTED},
    G.REJECTED: {G.PENDING},
}

CONTENT_TRANSITIONS: dict[ContentStatus, set[ContentStatus]] = {
    C.PENDING: {C.IN_PRODUCTION, C.AWAITING_APPROVAL, C.APPROVED, C.REJECTED},
    C.IN_PRODUCTION: {C.AWAITING_APPROVAL, C.APPROVED, C.REJECTED, C.PENDING},
    C.AWAITING_APPROVAL: {C.APPROVED, C.REJECTED, C.IN_PRODUCTION, C.PENDING},
    C.APPROVED: {C.PUBLISHED, C.REJECTED, C.PENDING},
    C.REJECTED: {C.PENDING, C.IN_PRODUCTION},
    C.PUBLISHED: set(),
}

REJECTION_LABEL = "Rejeição"


class InvalidTransition(ValueError):
    """A status change that the track's transition table does not allow."""

    def __init__(self, track: Track, current: str, target: str):
        self.track = track
        self.current = current
        self.target = target
        super().__init__(f"Invalid {track.value} transition: {current} -> {target}")


def current_state(track: Track, stored: str | None) -> GuidelineApproval | ContentStatus:
    """
    Parse a stored column value into its track enum.

    NULL columns predate the defaults: guidelines read as 'indefinido',
    content status as 'pendente'.
    """
    if track is Track.GUIDELINES:
        return GuidelineApproval(stored) if stored else G.UNDEFINED
    return ContentStatus(stored) if stored else C.PENDING


def ensure_transition(track: Track, stored: str | None, target: str) -> None:
    """
    Validate a status change on one track.

    Raises:
        InvalidTransition: target unknown for this track or not reachable.
    """
    current = current_state(track, stored)
    if track is Track.GUIDELINES:
        table = GUIDELINE_TRANSITIONS
        enum_cls = GuidelineApproval
    else:
        table = CONTENT_TRANSITIONS
        enum_cls = ContentStatus

    try:
        new = enum_cls(target)
    except ValueError:
        raise InvalidTransition(track, current.value, str(target)) from None

    if new == current:
        return
    if new not in table[current]:
        raise InvalidTransition(track, current.value, new.value)


def rejected_value(track: Track) -> str:
    if track is Track.GUIDELINES:
        return G.REJECTED.value
    return C.REJECTED.value


# ---------------------------------------------------------------------------
# Creation defaults
# ---------------------------------------------------------------------------


def theme_defaults() -> dict[str, str]:
    """Theme-mode items enter review on both tracks."""
    return {
        Track.GUIDELINES.value: G.PENDING.value,
        Track.CONTENT.value: C.PENDING.value,
    }


def content_defaults(requested: ContentStatus | None, caller_is_agency: bool) -> dict[str, str]:
    """
    Content-mode items skip theme review.

    Only an agency caller may pick the starting production status.
    """
    status = requested if (caller_is_agency and requested is not None) else C.PENDING
    return {
        Track.GUIDELINES.value: G.APPROVED.value,
        Track.CONTENT.value: status.value,
    }


# ---------------------------------------------------------------------------
# Observations log
# ---------------------------------------------------------------------------


def rejection_entry(rejected_on: date, reason: str) -> str:
    return f"[{REJECTION_LABEL} - {format_short_date(rejected_on)}]: {reason}"


def render_observations(base: str | None, entries: list[tuple[date, str]]) -> str | None:
    """
    Build the observations text shown to callers.

    The creation text stays on top; each rejection follows in order,
    separated by a blank line.
    """
    parts = [base] if base else []
    parts.extend(rejection_entry(rejected_on, reason) for rejected_on, reason in entries)
    return "\n\n".join(parts) if parts else None
