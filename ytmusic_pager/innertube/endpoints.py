"""URLs of the InnerTube endpoints used by YouTube Music."""


MUSIC_API_URL = "https://music.youtube.com/youtubei/v1"


class Endpoints:
    """Full endpoint URLs (POST with a JSON body)."""

    SEARCH = MUSIC_API_URL + "/search"
    BROWSE = MUSIC_API_URL + "/browse"
    NEXT = MUSIC_API_URL + "/next"
