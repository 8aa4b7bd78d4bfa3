"""Collection provisioning: reconcile a registry against the server.

Idempotent: a collection whose name already exists is skipped (or
updated when update_existing is set), so running twice is safe. Only the
name decides create vs. skip; field lists and rules of existing
collections are not compared.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fstack.application.dtos.provisioning import (
    AdminCredentials,
    ProgressEvent,
    ProgressSink,
    ProvisionError,
    ProvisionOptions,
    ProvisionResult,
    ProvisionSettings,
)
from fstack.application.interfaces.services import ICollectionAdminClient
from fstack.application.services.payload_builder import build_collection_payload
from fstack.core.constants import (
    SENTINEL_ADMIN,
    SENTINEL_SETTINGS,
    SENTINEL_SYSTEM,
    USERS_COLLECTION,
)
from fstack.domain.enums import ProgressKind
from fstack.domain.exceptions import (
    AuthError,
    FStackException,
    ItemCreateError,
    ItemUpdateError,
    RemoteFetchError,
    SettingsUpdateError,
)
from fstack.domain.registry import DEFAULT_COLLECTIONS, validate_registry
from fstack.domain.schema import CollectionSchema
from fstack.infrastructure.pocketbase.client import create_pocketbase_client
from fstack.infrastructure.pocketbase.session import AdminSession

logger = logging.getLogger(__name__)


def _error_message(exc: Exception) -> str:
    if isinstance(exc, FStackException):
        return exc.message
    return str(exc) or exc.__class__.__name__


class _RunRecorder:
    """Accumulates outcomes of one run and forwards progress events."""

    def __init__(self, on_progress: ProgressSink | None) -> None:
        self._on_progress = on_progress
        self.created: list[str] = []
        self.skipped: list[str] = []
        self.errors: list[ProvisionError] = []

    def emit(self, kind: ProgressKind, text: str) -> None:
        if self._on_progress is None:
            return
        try:
            self._on_progress(ProgressEvent(kind, text))
        except Exception:
            logger.exception("Progress callback failed for event %r", text)

    def info(self, text: str) -> None:
        self.emit(ProgressKind.INFO, text)

    def record_created(self, entry: str, text: str) -> None:
        self.created.append(entry)
        self.emit(ProgressKind.CREATED, text)

    def record_skipped(self, name: str, text: str) -> None:
        self.skipped.append(name)
        self.emit(ProgressKind.SKIPPED, text)

    def record_error(self, collection: str, error: str, text: str) -> None:
        self.errors.append(ProvisionError(collection, error))
        self.emit(ProgressKind.FAILED, text)

    def abort(self, collection: str, error: str, message: str) -> ProvisionResult:
        """Terminal result for a systemic failure; no per-item outcomes."""
        self.emit(ProgressKind.FAILED, message)
        return ProvisionResult(
            success=False,
            errors=(ProvisionError(collection, error),),
            message=message,
        )

    def finish(self) -> ProvisionResult:
        if self.errors:
            message = f"Completed with {len(self.errors)} error(s)"
        elif not self.created and self.skipped:
            message = f"All {len(self.skipped)} collection(s) already exist"
        else:
            message = f"Successfully created {len(self.created)} collection(s)"
        return ProvisionResult(
            success=not self.errors,
            created=tuple(self.created),
            skipped=tuple(self.skipped),
            errors=tuple(self.errors),
            message=message,
        )


class CollectionProvisioner:
    """Creates (or updates) registry collections that the server lacks.

    Steps run strictly in order: authenticate, list existing names, apply
    optional settings, then one create/skip/update per schema. A failed
    authentication or listing ends the run; every other failure is
    recorded and the run continues. reconcile() never raises for remote
    failures and always clears its admin session before returning.
    """

    def __init__(self, client: ICollectionAdminClient) -> None:
        self._client = client

    async def reconcile(
        self,
        registry: Sequence[CollectionSchema],
        credentials: AdminCredentials,
        options: ProvisionOptions | None = None,
    ) -> ProvisionResult:
        """Provision every schema in registry, in order.

        Raises:
            SchemaDefinitionError: registry declares a name twice (checked
                before any request is made).
        """
        options = options or ProvisionOptions()
        validate_registry(registry)
        run = _RunRecorder(options.on_progress)

        run.info("Authenticating as admin...")
        try:
            session = await self._authenticate(credentials)
        except AuthError as exc:
            logger.warning("Admin authentication failed: %s", exc.message)
            return run.abort(
                SENTINEL_ADMIN,
                exc.message,
                f"Admin authentication failed: {exc.message}",
            )
        run.info("Admin authentication successful")

        try:
            run.info("Fetching existing collections...")
            try:
                existing = await self._list_existing(session)
            except RemoteFetchError as exc:
                logger.warning("Listing collections failed: %s", exc.message)
                return run.abort(
                    SENTINEL_SYSTEM,
                    exc.message,
                    f"Failed to fetch collections: {exc.message}",
                )
            run.info(f"Found {len(existing)} existing collections")

            if options.settings is not None and not options.settings.is_empty:
                await self._apply_settings(session, options.settings, run)

            for schema in registry:
                await self._provision_one(
                    session, schema, existing, options.update_existing, run
                )

            result = run.finish()
            logger.info(
                "Provisioning finished: %s (created=%d skipped=%d errors=%d)",
                result.message,
                len(result.created),
                len(result.skipped),
                len(result.errors),
            )
            return result
        finally:
            session.clear()

    async def _authenticate(self, credentials: AdminCredentials) -> AdminSession:
        try:
            return await self._client.authenticate(
                credentials.email, credentials.password.get_secret_value()
            )
        except Exception as exc:
            raise AuthError(_error_message(exc)) from exc

    async def _list_existing(self, session: AdminSession) -> set[str]:
        """Return the names of all collections on the server."""
        try:
            collections = await self._client.list_collections(session)
            return {c["name"] for c in collections}
        except Exception as exc:
            raise RemoteFetchError(_error_message(exc)) from exc

    async def _apply_settings(
        self,
        session: AdminSession,
        settings: ProvisionSettings,
        run: _RunRecorder,
    ) -> None:
        """Apply optional settings; a failure is recorded, never fatal."""
        try:
            if settings.google_auth is not None:
                run.info("Updating collection OAuth2 settings...")
                await self._update_oauth(session, settings)
                run.info(f'Google OAuth2 enabled on "{USERS_COLLECTION}" collection')
            else:
                run.info("Updating global PocketBase settings...")
                await self._update_global_settings(session, settings)
                run.info("Settings updated successfully")
        except SettingsUpdateError as exc:
            logger.warning(
                "Settings update (%s) failed: %s", exc.details["target"], exc.message
            )
            run.record_error(
                SENTINEL_SETTINGS,
                exc.message,
                f"Failed to update settings: {exc.message}",
            )

    async def _update_oauth(
        self, session: AdminSession, settings: ProvisionSettings
    ) -> None:
        google = settings.google_auth
        oauth2 = {
            "enabled": True,
            "providers": [
                {
                    "name": "google",
                    "clientId": google.client_id,
                    "clientSecret": google.client_secret.get_secret_value(),
                }
            ],
        }
        try:
            await self._client.update_user_auth_settings(session, oauth2)
        except Exception as exc:
            raise SettingsUpdateError(_error_message(exc), USERS_COLLECTION) from exc

    async def _update_global_settings(
        self, session: AdminSession, settings: ProvisionSettings
    ) -> None:
        try:
            await self._client.update_settings(session, dict(settings.extra))
        except Exception as exc:
            raise SettingsUpdateError(_error_message(exc), "settings") from exc

    async def _provision_one(
        self,
        session: AdminSession,
        schema: CollectionSchema,
        existing: set[str],
        update_existing: bool,
        run: _RunRecorder,
    ) -> None:
        name = schema.name
        run.info(f'Processing "{name}"...')

        if name in existing:
            if not update_existing:
                run.record_skipped(name, f'Skipped "{name}" (already exists)')
                return
            try:
                await self._update(session, schema)
            except ItemUpdateError as exc:
                logger.warning("Update of %s failed: %s", name, exc.message)
                run.record_error(
                    name, exc.message, f'Failed to update "{name}": {exc.message}'
                )
            else:
                run.record_created(f"{name} (updated)", f'Updated "{name}"')
            return

        try:
            await self._create(session, schema)
        except ItemCreateError as exc:
            logger.warning("Create of %s failed: %s", name, exc.message)
            run.record_error(
                name, exc.message, f'Failed to create "{name}": {exc.message}'
            )
        else:
            run.record_created(name, f'Created "{name}"')

    async def _create(self, session: AdminSession, schema: CollectionSchema) -> None:
        try:
            await self._client.create_collection(
                session, build_collection_payload(schema)
            )
        except Exception as exc:
            raise ItemCreateError(schema.name, _error_message(exc)) from exc

    async def _update(self, session: AdminSession, schema: CollectionSchema) -> None:
        try:
            current = await self._client.get_collection(session, schema.name)
            await self._client.update_collection(
                session, current["id"], build_collection_payload(schema)
            )
        except Exception as exc:
            raise ItemUpdateError(schema.name, _error_message(exc)) from exc


async def provision_collections(
    pb_url: str,
    credentials: AdminCredentials,
    registry: Sequence[CollectionSchema] = DEFAULT_COLLECTIONS,
    options: ProvisionOptions | None = None,
    *,
    timeout: float | None = None,
) -> ProvisionResult:
    """Provision registry on the server at pb_url with a client of its own.

    Only pb_url and timeout configure the client; settings are not read.
    """
    async with create_pocketbase_client(pb_url, timeout=timeout) as client:
        return await CollectionProvisioner(client).reconcile(
            registry, credentials, options
        )


def get_provision_summary(
    registry: Sequence[CollectionSchema] = DEFAULT_COLLECTIONS,
) -> str:
    """Describe what will be provisioned: one entry per collection with its fields."""
    lines = ["Collections to provision:", ""]
    for schema in registry:
        lines.append(f"  • {schema.name} ({schema.type.value})")
        lines.append(f"    Fields: {', '.join(schema.field_names)}")
    return "\n".join(lines)
