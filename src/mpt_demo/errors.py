class MptDemoError(RuntimeError):
    """Any failure that aborts the token lifecycle run."""
