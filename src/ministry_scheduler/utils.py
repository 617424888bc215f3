import logging

# request chatter from the Google Sheets client
QUIET_LOGGERS = ("urllib3", "google.auth")


def setup_logging(verbose=False, log_file="debug.log"):
    """Console logging at INFO (DEBUG with verbose); log_file always gets DEBUG."""
    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.INFO)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[console, file_handler],
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def format_display_name(full_name: str) -> str:
    """
    Shorten a "First Last" name to "First L.".

    Only the first two space-separated tokens are used. A single-token name
    is returned unchanged.

    Examples:
        "John Smith" -> "John S."
        "Mary Ann Lee" -> "Mary A."
        "Cher" -> "Cher"
    """
    parts = full_name.split(" ")
    if len(parts) < 2 or not parts[1]:
        return full_name
    return f"{parts[0]} {parts[1][0].upper()}."
