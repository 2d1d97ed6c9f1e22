# src/app.py          <-- keep it at the top level of the ZIP
# Handler path:  app.handler
#
# What it does:
#   • Re-exports the packaged handler so the function can be configured
#     with the short handler path
#   • Prints "Hello <request-id>n" once per invocation and returns null

from certificate_checker.app import handler

__all__ = ["handler"]
