"""Remote feed loading over HTTP."""
