"""Workflow dispatch trigger components.

- Settings loaded from the environment and `.env`
- Structured logging
- A GitHub REST client and the dispatch service built on it
"""
