"""Text layout helpers for small fixed-size displays."""


def smart_wrap(text: str, max_width: int, max_lines: int) -> list[str]:
    """Wrap text at spaces into exactly max_lines rows of at most max_width characters.

    Words longer than a row are cut. Text that does not fit into max_lines
    rows is dropped. Missing rows are padded with empty strings.
    """
    lines: list[str] = []
    current_line = ""

    for word in text.split():
        candidate_len = len(word) if not current_line else len(current_line) + 1 + len(word)
        if candidate_len <= max_width:
            current_line = f"{current_line} {word}" if current_line else word
            continue

        if current_line:
            lines.append(current_line)
        if len(lines) >= max_lines:
            current_line = ""
            break
        current_line = word[:max_width]

    if current_line and len(lines) < max_lines:
        lines.append(current_line)

    while len(lines) < max_lines:
        lines.append("")
    return lines


def departure_rows(line: str, destination: str, minutes_until: int, max_width: int) -> list[str]:
    """Lay out one departure as up to two wrapped rows plus a "<n> min" row.

    Empty wrap rows are dropped so the minutes follow the last text row.
    """
    wrapped = [row for row in smart_wrap(f"{line} {destination}", max_width, 2) if row]
    return [*wrapped, f"{minutes_until} min"]
