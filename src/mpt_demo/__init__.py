from mpt_demo.errors import MptDemoError

__all__ = ["MptDemoError"]
