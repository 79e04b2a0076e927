import csv
import io
import logging
from typing import List, Optional

from billflow.errors import ValidationError
from billflow.reports.aggregation import filter_entities
from .models import Client, ClientCreate, ClientImportSummary, ClientUpdate

logger = logging.getLogger(__name__)


def _validate_email(email: Optional[str]):
    if email is not None and "@" not in email:
        raise ValidationError("Invalid email format")


async def _ensure_unique_email(store, email: str, client_id: Optional[int] = None):
    for existing in await store.clients.get_all():
        if existing.email.lower() == email.lower() and existing.id != client_id:
            raise ValidationError(f"Email {email} is already in use by another client")


# ============================================================
# CREATE CLIENT
# ============================================================

async def create_client(store, data: ClientCreate) -> Client:
    _validate_email(data.email)
    await _ensure_unique_email(store, data.email)

    client = await store.clients.create(data.model_dump())
    logger.info(f"Client {client.id} created ({client.name})")
    return client


# ============================================================
# GET CLIENTS
# ============================================================

async def get_all_clients(store, search: str = "") -> List[Client]:
    clients = await store.clients.get_all()
    return filter_entities(clients, search, fields=("name", "email"))


async def get_client_by_id(store, client_id: int) -> Client:
    return await store.clients.get_by_id(client_id)


# ============================================================
# UPDATE CLIENT
# ============================================================

async def update_client(store, client_id: int, data: ClientUpdate) -> Client:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    # Check existence first so a bad id reports 404
    await store.clients.get_by_id(client_id)

    if "email" in changes:
        _validate_email(changes["email"])
        if changes["email"]:
            await _ensure_unique_email(store, changes["email"], client_id)

    client = await store.clients.update(client_id, changes)
    logger.info(f"Client {client_id} updated: {sorted(changes)}")
    return client


# ============================================================
# CSV IMPORT
# ============================================================

async def import_clients_from_csv(store, file_content: bytes, filename: str,
                                  skip_duplicates: bool = True) -> ClientImportSummary:
    try:
        csv_text = file_content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("File must be UTF-8 encoded")

    rows = list(csv.DictReader(io.StringIO(csv_text)))
    if not rows:
        raise ValidationError("CSV file is empty")

    for column in ("name", "email"):
        if column not in rows[0]:
            raise ValidationError(f"Missing required column: {column}")

    existing = {c.email.lower(): c for c in await store.clients.get_all()}
    summary = ClientImportSummary(
        filename=filename, total_rows=len(rows), inserted=0, updated=0, skipped=0
    )

    for idx, row in enumerate(rows, start=2):
        name = (row.get("name") or "").strip()
        email = (row.get("email") or "").strip()

        if not name:
            summary.errors.append(f"Row {idx}: Skipped (empty name)")
            summary.skipped += 1
            continue

        if "@" not in email:
            summary.errors.append(f"Row {idx} ({name}): Invalid email format")
            summary.skipped += 1
            continue

        terms = (row.get("payment_terms") or "").strip()
        try:
            payment_terms = int(terms) if terms else 30
        except ValueError:
            summary.errors.append(f"Row {idx} ({name}): Invalid payment_terms")
            summary.skipped += 1
            continue
        if payment_terms <= 0:
            summary.errors.append(f"Row {idx} ({name}): Invalid payment_terms")
            summary.skipped += 1
            continue

        fields = {
            "name": name,
            "email": email,
            "phone": (row.get("phone") or "").strip() or None,
            "address": (row.get("address") or "").strip() or None,
            "payment_terms": payment_terms,
        }

        duplicate = existing.get(email.lower())
        if duplicate:
            if skip_duplicates:
                summary.errors.append(f"Row {idx} ({name}): Skipped (duplicate found)")
                summary.skipped += 1
            else:
                existing[email.lower()] = await store.clients.update(duplicate.id, fields)
                summary.updated += 1
            continue

        existing[email.lower()] = await store.clients.create(fields)
        summary.inserted += 1

    logger.info(
        f"Client import {filename}: {summary.inserted} inserted, "
        f"{summary.updated} updated, {summary.skipped} skipped"
    )
    return summary
