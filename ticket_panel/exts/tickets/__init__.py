"""Support ticket panel: per-guild setup, panel publishing and private ticket channels."""

# Every ticket channel is named TICKET_PREFIX + the opener's lowercased username
TICKET_PREFIX = "ticket-"

CLOSE_WARNING = "Closing in {delay:g} seconds..."

# Shown in the welcome message of each new ticket, picked uniformly at random
QUOTES = (
    "Believe in yourself. Not in the you who believes in me. Believe in the you who believes in yourself. – Kamina",
    "A lesson without pain is meaningless. That’s because no one can gain without sacrificing something. "
    "– Edward Elric",
    "The moment you think of giving up, think of the reason why you held on so long. – Natsu Dragneel",
    "If you don’t take risks, you can’t create a future! – Monkey D. Luffy",
    "We each need to find our own inspiration. Sometimes, it’s not easy. – Kikyō",
)


def ticket_channel_name(username: str) -> str:
    """Return the channel name used for ``username``'s ticket."""
    return f"{TICKET_PREFIX}{username.lower()}"


def is_ticket_channel(channel: object) -> bool:
    """Check whether ``channel`` is named like a ticket channel."""
    name = getattr(channel, "name", None)
    return isinstance(name, str) and name.startswith(TICKET_PREFIX)
