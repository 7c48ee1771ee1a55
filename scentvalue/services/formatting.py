"""Display formatting for weights and prices."""


def format_number(value: float) -> str:
    """Plain number with no grouping; whole values drop the trailing '.0'."""
    if value == int(value):
        return str(int(value))
    return repr(float(value))


def format_price(value: float) -> str:
    """Thousands-grouped amount with at most 3 decimals (e.g. 253000 -> '253,000')."""
    text = f"{value:,.3f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_grouped_weight(value: float) -> str:
    """Grouped gram value for reports (e.g. 1136 -> '1,136')."""
    return format_price(value)


def format_net(value: float) -> str:
    """Net weight / volume to 2 decimals."""
    return f"{value:.2f}"
