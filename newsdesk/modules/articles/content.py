"""
Rich-text content sanitising.

The article editor only produces a small set of constructs: bold, italic,
strike, headings 1-2, bullet and ordered lists, and links. Anything else that
reaches the store is unwrapped to its text.
"""

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = {
    'p', 'br',
    'strong', 'b',
    'em', 'i',
    's', 'strike', 'del',
    'h1', 'h2',
    'ul', 'ol', 'li',
    'a',
}

ALLOWED_ATTRIBUTES = {
    'a': {'href', 'target', 'rel'},
}

# Dropped together with everything inside them
REMOVED_TAGS = {'script', 'style', 'iframe', 'object', 'embed', 'template', 'noscript'}

SAFE_URL_SCHEMES = ('http://', 'https://', 'mailto:')


def _safe_href(href):
    value = (href or '').strip()
    if not value:
        return False
    if value.lower().startswith(SAFE_URL_SCHEMES):
        return True
    # relative links and fragments have no scheme
    return ':' not in value.split('/', 1)[0]


def sanitize_html(html):
    """Restrict HTML to the editor's allow-list"""
    if not html:
        return ''

    soup = BeautifulSoup(html, 'html.parser')

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(sorted(REMOVED_TAGS)):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue

        allowed = ALLOWED_ATTRIBUTES.get(tag.name, set())
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag[attr]

        if tag.name == 'a' and 'href' in tag.attrs and not _safe_href(tag['href']):
            del tag['href']

    return str(soup)


def html_to_text(html, max_length=None):
    """Plain text from HTML content, optionally truncated on a word boundary"""
    if not html:
        return ''
    text = ' '.join(BeautifulSoup(html, 'html.parser').get_text(' ').split())
    if max_length and len(text) > max_length:
        text = text[:max_length].rsplit(' ', 1)[0] + '...'
    return text
