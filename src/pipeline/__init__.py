"""Request pipeline module for the Cinema Management API.

This module holds the generic building blocks every resource router is
assembled from:

- responses: the ``{success, message, data}`` envelope
- listing: select/sort/limit/page/paging parsing and paginated execution
- filters: nested route parameters turned into implicit list filters
- references: existence checks of referenced identifiers before writes
- records: single-record lookup, uniqueness checks and guarded commits

Request bodies are validated by the per-entity pydantic schemas before any
of these run.
"""
