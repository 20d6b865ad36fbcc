"""Match commentary from a hosted language model.

Uses the Gemini ``generateContent`` REST endpoint directly with httpx. Nothing
here touches simulation state: the session hands in an event description and
the scores, and gets back a short line of text. Requests run on a background
worker so a slow or failing service never delays a tick.
"""

import os
import threading
import time
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import httpx
from dotenv import load_dotenv

from paddle_engine import arena

# Load environment variables
load_dotenv()

FALLBACK_TEXT = "The crowd goes wild!"
EMPTY_TEXT = "What a play!"

PERSONALITY_PROMPTS = {
    "enthusiastic": (
        "You are an incredibly energetic and loud sports commentator. Use caps, exclamation "
        "marks, and intense sports metaphors. You LOVE the drama."
    ),
    "sarcastic": (
        "You are a witty, dry, and slightly condescending commentator. You find human effort "
        "amusing and machine precision expected. Be biting and clever."
    ),
    "neutral": (
        "You are a professional, matter-of-fact sports broadcaster. Be descriptive, analytical, "
        "and objective. Focus on the stats and the play."
    ),
}


@dataclass
class Commentary:
    """One line of commentary."""
    text: str
    timestamp: float


def build_prompt(
    event: str,
    player_score: int,
    opponent_score: int,
    personality: str,
    is_game_over: bool = False,
    recent: tuple = (),
) -> str:
    """Assemble the model prompt for one event."""
    persona = PERSONALITY_PROMPTS[personality]

    if is_game_over:
        context = (
            f"The match is OVER! Final score - Player: {player_score}, Opponent: {opponent_score}. "
            "Provide a final summary of the winner's dominance and the loser's performance."
        )
    else:
        context = (
            f"The player just: {event}. Current score - Player: {player_score}, "
            f"Opponent: {opponent_score}. Reaction required."
        )

    lines = [persona, f"Context: {context}"]
    if recent:
        lines.append("Do not repeat any of these earlier lines: " + " | ".join(recent))
    lines.append("Limit your response to 20 words maximum. Be punchy and stay in character.")
    return "\n".join(lines)


class CommentaryClient:
    """Gemini client for one-line commentary."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        temperature: float = 0.9,
        top_p: float = 0.8,
        max_tokens: int = 60,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the commentary client.

        Args:
            model: Model ID (defaults to COMMENTARY_MODEL env var, then gemini-2.0-flash)
            api_key: API key (defaults to GEMINI_API_KEY, then API_KEY env var)
            temperature: Sampling temperature
            top_p: Nucleus sampling cutoff
            max_tokens: Maximum response tokens
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.model = model or os.getenv("COMMENTARY_MODEL", "gemini-2.0-flash")
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

        if not self.api_key:
            raise ValueError(
                "Gemini API key required. Set GEMINI_API_KEY env var or pass api_key."
            )

        self._client = httpx.Client(timeout=timeout, transport=transport)

    def get_commentary(
        self,
        event: str,
        player_score: int,
        opponent_score: int,
        personality: str,
        is_game_over: bool = False,
        recent: tuple = (),
    ) -> str:
        """Return one line of commentary. Never raises; falls back to a stock line."""
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        payload = {
            "contents": [{
                "parts": [{
                    "text": build_prompt(
                        event, player_score, opponent_score, personality, is_game_over, recent
                    ),
                }],
            }],
            "generationConfig": {
                "temperature": self.temperature,
                "topP": self.top_p,
                "maxOutputTokens": self.max_tokens,
            },
        }

        try:
            response = self._client.post(
                f"{self.BASE_URL}/{self.model}:generateContent",
                headers=headers,
                json=payload,
            )
            response.raise_for_status()
            data = response.json()

            candidates = data.get("candidates") or []
            if not candidates:
                return EMPTY_TEXT
            parts = candidates[0].get("content", {}).get("parts") or []
            text = "".join(p.get("text", "") for p in parts).strip()
            return text or EMPTY_TEXT

        except httpx.HTTPStatusError as e:
            print(f"[COMMENTARY ERROR] HTTP {e.response.status_code}: {e.response.text}")
            return FALLBACK_TEXT
        except Exception as e:
            print(f"[COMMENTARY ERROR] {e}")
            return FALLBACK_TEXT

    def close(self) -> None:
        self._client.close()


class CommentaryFeed:
    """Fire-and-forget commentary requests with a short newest-first history."""

    def __init__(self, client: CommentaryClient, max_items: int = arena.COMMENTARY_HISTORY):
        self.client = client
        self._items: deque = deque(maxlen=max_items)
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="commentary")

    @property
    def items(self) -> list[Commentary]:
        with self._lock:
            return list(self._items)

    def recent_phrases(self) -> tuple:
        return tuple(c.text for c in self.items)

    def request(
        self,
        event: str,
        player_score: int,
        opponent_score: int,
        personality: str,
        is_game_over: bool = False,
    ) -> Future:
        """Queue a request and return immediately.

        Results that arrive after further points are still added; the feed
        just shows whatever came back most recently.
        """
        recent = self.recent_phrases()
        return self._executor.submit(
            self._fetch,
            event, player_score, opponent_score, personality, is_game_over, recent,
        )

    def _fetch(self, *args) -> str:
        text = self.client.get_commentary(*args)
        with self._lock:
            self._items.appendleft(Commentary(text=text, timestamp=time.time()))
        return text

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)
        self.client.close()
