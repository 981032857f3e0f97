"""
Featured media helpers.

The featured media field holds either an image or a video URL. Video
detection is a plain substring sniff, so any URL that merely mentions
"video" is treated as one.
"""

import re

VIDEO_EXTENSIONS = ('.mp4', '.webm', '.ogg', '.mov', '.avi', '.mkv', '.m4v')
VIDEO_MARKERS = ('video', 'youtube', 'vimeo')

YOUTUBE_ID = re.compile(r'(?:youtube\.com/(?:watch\?(?:.*&)?v=|shorts/|embed/)|youtu\.be/)([\w-]{6,})')
VIMEO_ID = re.compile(r'vimeo\.com/(?:video/)?(\d+)')


def is_video(url):
    """True when the media reference looks like a video"""
    if not url:
        return False
    lowered = url.lower()
    return any(ext in lowered for ext in VIDEO_EXTENSIONS) or any(m in lowered for m in VIDEO_MARKERS)


def embed_url(url):
    """Player URL for YouTube/Vimeo pages, anything else is returned as-is"""
    if not url:
        return url
    match = YOUTUBE_ID.search(url)
    if match:
        return f"https://www.youtube.com/embed/{match.group(1)}"
    match = VIMEO_ID.search(url)
    if match:
        return f"https://player.vimeo.com/video/{match.group(1)}"
    return url
