"""Generate Laravel Blade views from a database table schema."""

__version__ = "0.1.0"
