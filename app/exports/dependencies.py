from fastapi import Request
from app.exports.formatters import FormatterRegistry


def get_formatters(request: Request) -> FormatterRegistry:
    """The registry built by the application factory."""
    return request.app.state.formatters
