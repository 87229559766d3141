"""
FastAPI Todo API package.

The application instance lives in todo_api.main; run it with the `todo-api`
console script or `python -m todo_api.main`.
"""
