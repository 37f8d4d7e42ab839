"""Infrastructure layer - adapters to the host environment."""

from varpick.infrastructure.pointer import PointerEvents, PointerSubscription
from varpick.infrastructure.text_area import TextAreaBuffer

__all__ = ["PointerEvents", "PointerSubscription", "TextAreaBuffer"]
