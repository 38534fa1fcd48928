"""Service layer.

Subpackages
-----------
- ``_shared``: :class:`BaseService`, framework-agnostic errors and the ports
  (token provider, password hasher, object storage) with their doubles.
- ``uploads``: admission rules, key naming and :class:`UploadService`.
- ``tokens``: :class:`TokenService`, stateless bearer tokens.
- ``accounts``: :class:`AccountService`, registration, login and profiles.
- ``auth``: :class:`AuthGate`, the bearer-token request gate.

Nothing is re-exported here so that ports and adapters can import the error
module without pulling in the database-backed services.
"""
