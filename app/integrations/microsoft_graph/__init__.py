"""Microsoft Graph integration: token, request execution and directory calls."""
