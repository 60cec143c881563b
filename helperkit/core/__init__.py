"""Core package for configuration and cross-cutting concerns.

This package provides the foundational components used across helperkit:

- **config**: Immutable, environment-driven settings
- **context**: Correlation ID management for outbound calls
- **exceptions**: Structured exception hierarchy with error codes
- **error_context**: Sensitive data sanitization for safe logging
- **logging**: Structured logging with Loguru
- **types**: Type aliases for better code clarity
"""
