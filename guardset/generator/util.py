"""Naming helpers for generated code."""


def to_camel_case(name: str) -> str:
    """Convert a guard name to a class name, e.g. botTax or bot_tax to BotTax."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)
