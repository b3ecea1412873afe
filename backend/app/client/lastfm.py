"""Song of the week from Last.fm scrobbles.

Best effort: any Last.fm failure is logged and reported as "no result", and
the dashboard falls back to the song cached in the weekly `song` feature.
"""

import logging
import time
from datetime import datetime
from typing import Any, Optional

import httpx

from app.client.api import ApiError, DashboardClient
from app.core.config import settings
from app.core.time_utils import local_now, sunday_week_bounds
from app.schemas.feature import FeatureKind

logger = logging.getLogger(__name__)

API_URL = "https://ws.audioscrobbler.com/2.0/"

# Last.fm serves this star image when it has no artwork
PLACEHOLDER_IMAGE_ID = "2a96cbd8b46e442fc41c2b86b821562f"

IMAGE_SIZES = ["extralarge", "large", "medium", "small"]


def pick_image(images: list[dict]) -> str:
    """Largest available image URL, or ''."""
    for size in IMAGE_SIZES:
        for img in images or []:
            if img.get("size") == size and img.get("#text"):
                return img["#text"]
    if images:
        return images[-1].get("#text") or ""
    return ""


class LastFmClient:
    def __init__(
        self,
        username: Optional[str] = None,
        api_key: Optional[str] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.username = username if username is not None else settings.lastfm_username
        self.api_key = api_key if api_key is not None else settings.lastfm_api_key
        self._http = http or httpx.Client(timeout=30)

    @property
    def configured(self) -> bool:
        return bool(self.username and self.api_key)

    def _call(self, **params) -> dict:
        query = {"format": "json", "api_key": self.api_key, **params}
        r = self._http.get(API_URL, params=query)
        r.raise_for_status()
        return r.json()

    def _count_plays(self, from_ts: int, to_ts: int) -> dict[tuple[str, str], dict]:
        counts: dict[tuple[str, str], dict] = {}
        page, total_pages = 1, 1
        while page <= total_pages:
            recent = self._call(
                method="user.getrecenttracks",
                user=self.username,
                **{"from": str(from_ts)},
                to=str(to_ts),
                limit="200",
                page=str(page),
                extended="1",
            ).get("recenttracks") or {}
            total_pages = int((recent.get("@attr") or {}).get("totalPages") or 1)

            tracks = recent.get("track") or []
            if isinstance(tracks, dict):  # a single scrobble comes back unwrapped
                tracks = [tracks]
            for t in tracks:
                # Now-playing entries carry no date
                uts = int((t.get("date") or {}).get("uts") or 0)
                if not uts:
                    continue
                name = (t.get("name") or "").strip()
                artist_info = t.get("artist") or {}
                artist = (artist_info.get("name") or artist_info.get("#text") or "").strip()
                if not name or not artist:
                    continue

                key = (artist.lower(), name.lower())
                seen = counts.get(key)
                if seen is None:
                    counts[key] = {
                        "count": 1,
                        "last_ts": uts,
                        "sample": {
                            "name": name,
                            "artist": artist,
                            "url": t.get("url") or "",
                            "image": pick_image(t.get("image") or []),
                        },
                    }
                else:
                    seen["count"] += 1
                    seen["last_ts"] = max(seen["last_ts"], uts)
            page += 1
        return counts

    def _enrich(self, song: dict[str, str]) -> dict[str, str]:
        info = self._call(
            method="track.getInfo",
            track=song["name"],
            artist=song["artist"],
            autocorrect="1",
        ).get("track")
        if not info:
            return song
        song = dict(song)
        song["url"] = song["url"] or info.get("url") or ""
        image = pick_image(info.get("image") or []) or pick_image((info.get("album") or {}).get("image") or [])
        if image and PLACEHOLDER_IMAGE_ID not in image:
            song["image"] = image
        return song

    def weekly_top_track(self, now: Optional[datetime] = None) -> Optional[dict[str, Any]]:
        """
        Most played track since local Sunday 00:00 (latest play breaks ties).

        Returns None when Last.fm is not configured or unreachable, and a
        song with empty fields when nothing was scrobbled this week.
        """
        if not self.configured:
            return None
        now = now or local_now(settings.timezone)
        week_start, week_end = sunday_week_bounds(now)
        bounds = {"week_start": week_start.isoformat(), "week_end": week_end.isoformat()}

        try:
            counts = self._count_plays(int(week_start.timestamp()), int(now.timestamp()))
            if not counts:
                return {"name": "", "artist": "", "url": "", "image": "", **bounds}
            best = max(counts.values(), key=lambda v: (v["count"], v["last_ts"]))
            song = self._enrich(best["sample"])
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Last.fm lookup failed: %s", exc)
            return None
        return {**song, **bounds}


def load_weekly_favorites(
    client: DashboardClient,
    lastfm: Optional[LastFmClient] = None,
    now: Optional[datetime] = None,
) -> dict[str, Optional[dict[str, Any]]]:
    """
    Current-week payload per feature kind (None when unset).

    A successful live song lookup wins and is cached as this week's `song`
    feature; otherwise the previously cached song is shown.
    """
    favorites: dict[str, Optional[dict[str, Any]]] = {}
    for kind in FeatureKind:
        doc = client.features.current(kind)
        favorites[kind.value] = doc.payload if doc and doc.payload else None

    live = lastfm.weekly_top_track(now) if lastfm is not None else None
    if live is not None:
        song = {**live, "timestamp": int(time.time() * 1000)}
        favorites[FeatureKind.song.value] = song
        try:
            client.features.upsert_current(FeatureKind.song, song)
        except ApiError as exc:
            # The live value is still shown; it is cached on the next load
            logger.warning("Could not cache song of the week: %s", exc)
    return favorites
