# acod/models/enums.py
"""
Persisted enumerations.

Values are the exact tokens stored in the `profiles` and `contents`
tables and MUST round-trip unchanged.
"""
from enum import Enum


class Role(str, Enum):
    AGENCY = "agencia"
    CLIENT = "cliente"


class Track(str, Enum):
    """The two independent status columns of a content item."""

    GUIDELINES = "approved_guidelines"
    CONTENT = "content_status"


class GuidelineApproval(str, Enum):
    UNDEFINED = "indefinido"
    PENDING = "pendente"
    APPROVED = "aprovado"
    REJECTED = "rejeitado"


class ContentStatus(str, Enum):
    PENDING = "pendente"
    IN_PRODUCTION = "em_producao"
    AWAITING_APPROVAL = "aguardando_aprovacao"
    APPROVED = "aprovado"
    REJECTED = "rejeitado"
    PUBLISHED = "publicado"
