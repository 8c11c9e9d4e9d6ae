"""Constants and configuration for the wiki browser."""

class BrowserConstants:
    """Central configuration constants for the browser."""

    # Wiki sources: name -> (API endpoint, article page base)
    WIKI_SOURCES = {
        "wikipedia": ("https://en.wikipedia.org/w/api.php", "https://en.wikipedia.org/wiki/"),
        "arch": ("https://wiki.archlinux.org/api.php", "https://wiki.archlinux.org/index.php/"),
    }
    WIKI_OPTIONS = ("wikipedia", "arch")

    # Network
    REQUEST_TIMEOUT = 5.0  # Seconds before a request fails rather than hangs
    USER_AGENT = "wikiterm/1.0 (terminal wiki browser)"

    # Highlighting
    URL_PATTERN = r"https?://[^\s/$.?#].[^\s]*"
    URL_TRAILING_PUNCTUATION = ".,;:!?'\""  # Trimmed from the end of a URL match

    # Input limits
    QUERY_CHAR_LIMIT = 150  # Wiki search input
    ARTICLE_QUERY_CHAR_LIMIT = 100  # In-article search input

    # Layout
    ARTICLE_CHROME_ROWS = 4  # Title, blank, help line, status line
    QUERY_PLACEHOLDER = "Enter your search query..."

    # Wake pipe markers
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    MESSAGE_PIPE_MARKER = b'M'  # Byte written to pipe when a task finishes

    # Status messages
    SEARCHING_MESSAGE = "Searching..."
    FETCHING_MESSAGE = "Fetching article..."
    FOUND_RESULTS_MESSAGE = "Found {} results for '{}'. Press Enter to select one."
    DISPLAYING_MESSAGE = "Displaying article: {}"
    MATCHES_MESSAGE = "{} matches for '{}'"
    NO_MATCHES_MESSAGE = "No matches for '{}'"
    ERROR_MESSAGE = "Error: {}"
    BUSY_MESSAGE = "Request already in progress..."
