# Limits for tool output

# Number of lines of context shown around an edit
SNIPPET_LINES: int = 4

# Default maximum length of a tool response before it is clipped
MAX_RESPONSE_LEN: int = 16000

TRUNCATED_MESSAGE: str = (
    "<response clipped><NOTE>To save on context only part of this file has been shown to you. "
    "Use `view` with a `view_range` to see the remaining lines.</NOTE>"
)

# Preview of newly created files
CREATE_PREVIEW_CHARS: int = 1000
