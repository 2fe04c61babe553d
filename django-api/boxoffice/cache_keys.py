"""Cache keys for catalog reads."""

EVENT_LIST = "events:list"


def event_detail(event_id: object) -> str:
    return f"events:{event_id}"


def event_seats(event_id: object) -> str:
    return f"events:{event_id}:seats"


def for_event(event_id: object) -> list[str]:
    """Every key that must be dropped when the event or its seats change."""
    return [EVENT_LIST, event_detail(event_id), event_seats(event_id)]
