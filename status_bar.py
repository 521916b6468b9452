import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, screen, revision, first_visible,
                  last_visible, total, animating, focus_description
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        screen = context.get("screen") or ""
        revision = context.get("revision")
        parts = [screen.upper() if screen else "-"]
        if revision is not None:
            parts.append(f"r{revision}")
        total = context.get("total")
        if total:
            first = context.get("first_visible", 0)
            last = context.get("last_visible", first)
            parts.append(f"items {first}-{max(first, last)} of {total}")
        focus = context.get("focus_description")
        if focus:
            parts.append(f"focus: {focus}")
        if context.get("animating"):
            parts.append("~")
        parts.append("? help")
        text = " " + " | ".join(parts)

    return text.ljust(width)[:width]
