"""Line ending cleanup for fetched calendar feeds."""


def clean_line_endings(data: bytes) -> bytes:
    """
    Normalize every line of a feed to end with a single LF.

    Carriage returns at the end of each line are dropped and a trailing LF
    is added to the last line if it is missing. Empty input stays empty.

    Args:
        data: Raw feed body

    Returns:
        Feed body with LF line endings
    """
    if not data:
        return b''

    lines = data.split(b'\n')
    if lines[-1] == b'':
        lines.pop()

    return b''.join(line.rstrip(b'\r') + b'\n' for line in lines)
