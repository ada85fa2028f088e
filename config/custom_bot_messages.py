"""Example message overrides for media-request-bot."""


def messages():
    prefix = "🤖 Beep Boop Beep... "
    return {
        "NO_TERM": f"{prefix} No search term found!!",
        "INVALID_SEL": f"{prefix} Does not compute, please enter a value within the range specified!!",
        "BOT_READY": lambda usage: f"{prefix} Request Bot Ready!!\n\n{usage}",
        "REQ_SUCCESS": lambda item, listing: f'{listing or ""}{prefix} "{item.title}" has been requested successfully!',
        "REQ_FAIL": lambda item: f'{prefix} Request for "{item.title}" has failed!',
        "REQ_EXISTS": lambda item: f'{prefix} "{item.title}" is already on the list!',
        "JELLYSEERR_FAIL": lambda err: f"{prefix} Something went wrong, try again later!",
        "REQ_CHOICE": lambda results: f"{prefix} Choose wisely from 1 - {len(results)}",
        "REQ_NO_ITEM": lambda kind, term, defaulted: (
            f"{prefix} No items found for term '{term}', are you sure it's a '{kind.value}'?"
        ),
    }
