"""Location: the router's view of the browser address bar.

``port`` defines the capability the router needs from its host,
``memory`` implements it in-process, and ``modes`` maps the three URL
encodings onto one canonical ``(path, query_string, full_url)`` triple.
"""
