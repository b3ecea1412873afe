from datetime import datetime, timezone

import httpx

from app.client.lastfm import LastFmClient, load_weekly_favorites, pick_image

NOW = datetime(2025, 1, 8, 12, 0, tzinfo=timezone.utc)
SUNDAY_TS = int(datetime(2025, 1, 5, tzinfo=timezone.utc).timestamp())


def _scrobble(name, artist, uts, image=""):
    return {
        "name": name,
        "artist": {"name": artist},
        "url": f"https://www.last.fm/music/{artist}/_/{name}",
        "image": [{"size": "extralarge", "#text": image}] if image else [],
        "date": {"uts": str(uts)},
    }


def _lastfm(tracks, info=None, pages=None, status=200):
    """LastFmClient over a MockTransport answering by the `method` param."""
    seen = []

    def handler(request):
        params = request.url.params
        seen.append(dict(params))
        if status != 200:
            return httpx.Response(status, json={"error": 29, "message": "Rate limit"})
        if params["method"] == "user.getrecenttracks":
            page = int(params["page"])
            chunk = pages[page - 1] if pages else tracks
            total = len(pages) if pages else 1
            return httpx.Response(
                200, json={"recenttracks": {"track": chunk, "@attr": {"totalPages": str(total)}}}
            )
        if params["method"] == "track.getInfo":
            return httpx.Response(200, json={"track": info} if info else {})
        return httpx.Response(400)

    http = httpx.Client(transport=httpx.MockTransport(handler))
    return LastFmClient("alice", "secret", http=http), seen


def test_pick_image_prefers_largest():
    images = [
        {"size": "small", "#text": "s.png"},
        {"size": "large", "#text": "l.png"},
        {"size": "extralarge", "#text": ""},
    ]
    assert pick_image(images) == "l.png"
    assert pick_image([]) == ""


def test_not_configured_returns_none():
    assert LastFmClient("", "").weekly_top_track(NOW) is None


def test_most_played_track_wins():
    tracks = [
        _scrobble("Lose Control", "Teddy Swims", SUNDAY_TS + 100),
        _scrobble("Espresso", "Sabrina Carpenter", SUNDAY_TS + 200, image="https://img/espresso.png"),
        _scrobble("espresso", "sabrina carpenter", SUNDAY_TS + 300),
        {"name": "Now Playing", "artist": {"name": "Someone"}, "@attr": {"nowplaying": "true"}},
    ]
    lastfm, seen = _lastfm(tracks)

    song = lastfm.weekly_top_track(NOW)
    assert song["name"] == "Espresso"
    assert song["artist"] == "Sabrina Carpenter"
    assert song["image"] == "https://img/espresso.png"
    assert song["week_start"].startswith("2025-01-05T00:00:00")

    recent = seen[0]
    assert recent["user"] == "alice"
    assert recent["api_key"] == "secret"
    assert recent["from"] == str(SUNDAY_TS)


def test_tie_goes_to_latest_play():
    tracks = [
        _scrobble("Early", "Band", SUNDAY_TS + 100),
        _scrobble("Late", "Band", SUNDAY_TS + 900),
    ]
    lastfm, _ = _lastfm(tracks)
    assert lastfm.weekly_top_track(NOW)["name"] == "Late"


def test_pages_are_followed():
    pages = [
        [_scrobble("A", "X", SUNDAY_TS + 1)],
        [_scrobble("B", "X", SUNDAY_TS + 2), _scrobble("B", "X", SUNDAY_TS + 3)],
    ]
    lastfm, seen = _lastfm(None, pages=pages)
    assert lastfm.weekly_top_track(NOW)["name"] == "B"
    assert [p["page"] for p in seen if p["method"] == "user.getrecenttracks"] == ["1", "2"]


def test_enrich_fills_artwork_but_skips_placeholder():
    info = {"url": "https://last.fm/t", "album": {"image": [{"size": "large", "#text": "https://img/album.png"}]}}
    lastfm, _ = _lastfm([_scrobble("Song", "Artist", SUNDAY_TS + 5)], info=info)
    assert lastfm.weekly_top_track(NOW)["image"] == "https://img/album.png"

    placeholder = {"image": [{"size": "large", "#text": "https://img/2a96cbd8b46e442fc41c2b86b821562f.png"}]}
    lastfm, _ = _lastfm([_scrobble("Song", "Artist", SUNDAY_TS + 5)], info=placeholder)
    assert lastfm.weekly_top_track(NOW)["image"] == ""


def test_nothing_played_gives_empty_song():
    lastfm, _ = _lastfm([])
    song = lastfm.weekly_top_track(NOW)
    assert song["name"] == "" and song["artist"] == ""
    assert "week_end" in song


def test_http_failure_returns_none():
    lastfm, _ = _lastfm([], status=503)
    assert lastfm.weekly_top_track(NOW) is None


def test_live_song_is_cached_as_weekly_feature(dashboard):
    dashboard.features.upsert_current("recipe", {"name": "Pho"})
    lastfm, _ = _lastfm([_scrobble("Song", "Artist", SUNDAY_TS + 5)])

    favorites = load_weekly_favorites(dashboard, lastfm, NOW)
    assert favorites["recipe"] == {"name": "Pho"}
    assert favorites["song"]["name"] == "Song"
    assert favorites["watch"] is None

    cached = dashboard.features.current("song")
    assert cached.payload["name"] == "Song"
    assert cached.payload["timestamp"] > 0


def test_cached_song_is_used_when_lastfm_is_down(dashboard):
    dashboard.features.upsert_current("song", {"name": "Cached", "artist": "Band"})
    lastfm, _ = _lastfm([], status=500)

    favorites = load_weekly_favorites(dashboard, lastfm, NOW)
    assert favorites["song"]["name"] == "Cached"
