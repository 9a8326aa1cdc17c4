"""Provider implementations for the supported chat endpoints

Providers register themselves with the @register_provider decorator and
are discovered by scan_and_import_providers().
"""

__all__ = []
