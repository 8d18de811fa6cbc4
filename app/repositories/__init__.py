"""
Repository package for document-store access.

Each collection module exposes a FastAPI dependency (`get_*_repository`)
returning an implementation of `DocumentRepositoryProtocol`. The backing
store is chosen by `DOCUMENT_STORE` (`mongo` or `memory`); tests swap in
fakes through `app.dependency_overrides`.
"""
