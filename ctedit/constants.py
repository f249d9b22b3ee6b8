"""Constants and configuration for the ctedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Editing
    TAB_WIDTH = 4  # Tab inserts this many literal spaces

    # Screen chrome
    HEADER_ROW = 0
    TEXT_TOP_MARGIN = 2  # Header row plus one blank row
    TEXT_LEFT_MARGIN = 2  # '~' gutter plus one blank column
    STATUS_ROWS = 1
    GUTTER_MARKER = "~"

    # Minimum viewport so offset arithmetic stays non-negative
    MIN_VIEW_WIDTH = 1
    MIN_VIEW_HEIGHT = 1

    # Header / status text
    APP_NAME = "ctedit"
    UNTITLED_NAME = "Untitled"
    HEADER_FORMAT = "{name} -- {app} -- {version}"
    STATUS_FORMAT = "Cursor: {x}, {y} -- {lines} lines"

    # Prompts
    SAVE_PROMPT = "Enter a path to save to: "
    LOAD_PROMPT = "Enter a path to load: "
    FIND_PROMPT = "Find: "
    QUIT_CONFIRM_MESSAGE = "Press Ctrl-C again to confirm quit. Press Esc to cancel"

    # Self-pipe markers for signals
    RESIZE_PIPE_MARKER = b'R'
    INTERRUPT_PIPE_MARKER = b'C'

    # File encoding; surrogateescape keeps arbitrary bytes round-trippable
    FILE_ENCODING = "utf-8"
    FILE_ERRORS = "surrogateescape"
