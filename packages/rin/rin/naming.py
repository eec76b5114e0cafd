"""Name canonicalisation shared by states, events and display fields."""


def canonical(name: object) -> str:
    """Return the lookup key for ``name``.

    Whitespace is removed and the result lower-cased, so ``"Wait Stable"``,
    ``"waitstable"`` and ``" WAIT stable "`` all name the same thing.
    """
    return "".join(str(name).split()).lower()
