"""folderio — uniform file/folder trees and streaming persistence."""

__version__ = "0.1.0"
