import logging
from collections import defaultdict

import httpx

logger = logging.getLogger("boggle")

_TITLES = {
    "human": "You won",
    "computer": "Computer won",
    "draw": "Draw",
}


def format_summary(summary: dict, words_per_group: int = 10) -> tuple[str, str]:
    """Build (title, body) for a finished game summary from Game.summary()."""
    human = summary["human"]
    computer = summary["computer"] or {"words": [], "score": 0}
    outcome = summary.get("outcome") or "draw"

    title = f"Boggle {summary['letters']} - {_TITLES.get(outcome, outcome)} {human['score']}:{computer['score']}"

    by_length: dict[int, list[str]] = defaultdict(list)
    for w in computer["words"]:
        by_length[len(w)].append(w)

    lines = [f"You: {', '.join(human['words']) or '-'}"]
    for length in sorted(by_length, reverse=True):
        group = sorted(by_length[length])
        shown = group[:words_per_group] if words_per_group > 0 else group
        more = len(group) - len(shown)
        lines.append(f"{length}L: {','.join(shown)}" + (f" (+{more})" if more > 0 else ""))

    counts = " | ".join(f"{l}L:{len(g)}" for l, g in sorted(by_length.items()))
    body = "\n".join(lines) + "\n\n" + counts
    return title, body


async def send_game_summary(
    summary: dict,
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    words_per_group: int = 10,
    transport: httpx.AsyncBaseTransport | None = None,
):
    """Send the end-of-game result to ntfy.sh. Best-effort — failures are logged, not raised."""
    try:
        title, body = format_summary(summary, words_per_group)

        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Priority": "default",
                    "Tags": "game_die",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except Exception as e:
        logger.error("Failed to send notification: %s", e)
