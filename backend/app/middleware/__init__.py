"""
Middleware Module

- cors: cross-origin access for the portfolio frontend
- error_handler: last-resort handler logging unexpected failures
"""
