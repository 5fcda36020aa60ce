"""
Component tests for ContractService over in-memory storage.
"""

import base64

import pytest
from fastapi import HTTPException

from app.domain.contracts.schemas import (
    ContractCreate,
    ContractStatus,
    ContractUpdate,
    SignatureRequest,
)
from app.domain.contracts.service import ContractService
from app.storage import contracts_key
from tests.conftest import FakeClock

SIGNATURE_PNG = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nsignature").decode()


@pytest.fixture
def service(storage, clock):
    return ContractService(storage, clock=clock)


def make_create(**overrides) -> ContractCreate:
    data = {
        "clientName": "Alex Doe",
        "eventDate": "2027-06-12",
        "eventVenue": "Rosewood Manor",
        "servicePackage": "Gold",
        "amount": 2000,
        "content": "<p>Service terms</p>",
    }
    data.update(overrides)
    return ContractCreate(**data)


class TestCreateContract:
    """Creation validates required fields and appends one draft"""

    def test_create_without_content_is_rejected(self, service, photographer):
        with pytest.raises(HTTPException) as exc_info:
            service.create_contract(ContractCreate(clientName="Alex Doe", amount=2000), photographer)

        assert exc_info.value.status_code == 400
        assert service.get_contracts(photographer) == []

    def test_create_with_content_appends_one_draft(self, service, photographer):
        contract = service.create_contract(
            ContractCreate(clientName="Alex Doe", amount=2000, content="Any terms"), photographer
        )

        contracts = service.get_contracts(photographer)
        assert len(contracts) == 1
        assert contracts[0].id == contract.id
        assert contract.status == ContractStatus.DRAFT
        assert contract.amount == 2000.0
        assert contract.signature is None
        assert contract.vendorId == photographer.id

    def test_create_without_client_name_is_rejected(self, service, photographer):
        with pytest.raises(HTTPException) as exc_info:
            service.create_contract(make_create(clientName=""), photographer)
        assert exc_info.value.status_code == 400

    def test_timestamps_are_set(self, service, photographer):
        contract = service.create_contract(make_create(), photographer)

        assert contract.createdAt == "2026-10-19T12:00:00.000Z"
        assert contract.updatedAt == contract.createdAt

    def test_ids_are_time_derived_and_unique(self, service, photographer):
        first = service.create_contract(make_create(), photographer)
        second = service.create_contract(make_create(clientName="Sam Roe"), photographer)

        assert first.id == "1792411200000"
        assert second.id == "1792411200001"

    @pytest.mark.parametrize(
        "amount,expected", [("2000", 2000.0), ("1500.50", 1500.5), ("abc", 0.0), (None, 0.0), ("", 0.0)]
    )
    def test_amount_is_parsed_leniently(self, service, photographer, amount, expected):
        contract = service.create_contract(make_create(amount=amount), photographer)
        assert contract.amount == expected

    def test_negative_amount_is_rejected(self, service, photographer):
        with pytest.raises(HTTPException) as exc_info:
            service.create_contract(make_create(amount=-5), photographer)
        assert exc_info.value.status_code == 400

    def test_content_is_sanitized(self, service, photographer):
        contract = service.create_contract(
            make_create(content='<p style="color: #8b5cf6;">Terms</p><script>alert(1)</script>'),
            photographer,
        )

        assert "<script>" not in contract.content
        assert "Terms</p>" in contract.content
        assert "color: #8b5cf6" in contract.content

    @pytest.mark.parametrize("content", ["<!-- draft notes -->", "<script></script>", "   "])
    def test_content_that_sanitizes_to_nothing_is_rejected(self, service, photographer, content):
        with pytest.raises(HTTPException) as exc_info:
            service.create_contract(make_create(content=content), photographer)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Contract content is required"
        assert service.get_contracts(photographer) == []

    def test_collection_is_persisted_wholesale(self, service, storage, photographer):
        service.create_contract(make_create(), photographer)
        service.create_contract(make_create(clientName="Sam Roe"), photographer)

        records = storage.get_collection(photographer.id)
        assert [record["clientName"] for record in records] == ["Alex Doe", "Sam Roe"]
        assert records[0]["status"] == "draft"
        assert contracts_key(photographer.id) == "contracts_1"

    def test_collections_are_partitioned_by_vendor(self, service, photographer, caterer):
        service.create_contract(make_create(), photographer)

        assert service.get_contracts(caterer) == []
        with pytest.raises(HTTPException) as exc_info:
            service.get_contract(service.get_contracts(photographer)[0].id, caterer)
        assert exc_info.value.status_code == 404


class TestUpdateContract:
    """Updates merge fields and bump the update timestamp"""

    def test_update_merges_fields(self, service, clock, photographer):
        contract = service.create_contract(make_create(), photographer)
        clock.advance(minutes=5)

        updated = service.update_contract(
            contract.id, ContractUpdate(eventVenue="Lakeside Barn", amount="2500"), photographer
        )

        assert updated.eventVenue == "Lakeside Barn"
        assert updated.amount == 2500.0
        assert updated.clientName == "Alex Doe"
        assert updated.createdAt == contract.createdAt
        assert updated.updatedAt == "2026-10-19T12:05:00.000Z"
        assert service.get_contract(contract.id, photographer) == updated

    def test_update_unknown_contract(self, service, photographer):
        with pytest.raises(HTTPException) as exc_info:
            service.update_contract("missing", ContractUpdate(eventVenue="x"), photographer)
        assert exc_info.value.status_code == 404

    def test_update_cannot_clear_content(self, service, photographer):
        contract = service.create_contract(make_create(), photographer)

        with pytest.raises(HTTPException) as exc_info:
            service.update_contract(contract.id, ContractUpdate(content=""), photographer)

        assert exc_info.value.status_code == 400
        assert service.get_contract(contract.id, photographer).content == contract.content

    @pytest.mark.parametrize("content", ["<!-- draft notes -->", "<script></script>"])
    def test_update_content_that_sanitizes_to_nothing_is_rejected(self, service, photographer, content):
        contract = service.create_contract(make_create(), photographer)

        with pytest.raises(HTTPException) as exc_info:
            service.update_contract(contract.id, ContractUpdate(content=content), photographer)

        assert exc_info.value.status_code == 400
        assert service.get_contract(contract.id, photographer).content == contract.content

    def test_update_keeps_other_contracts(self, service, photographer):
        first = service.create_contract(make_create(), photographer)
        second = service.create_contract(make_create(clientName="Sam Roe"), photographer)

        service.update_contract(first.id, ContractUpdate(servicePackage="Platinum"), photographer)

        contracts = service.get_contracts(photographer)
        assert [c.id for c in contracts] == [first.id, second.id]
        assert contracts[1] == second


class TestSignContract:
    """Signing moves a draft to signed exactly once"""

    def test_typed_signature(self, service, clock, photographer):
        contract = service.create_contract(make_create(), photographer)
        clock.advance(seconds=30)

        signed = service.sign_contract(
            contract.id, SignatureRequest(signature="  Alex Doe ", mode="type"), photographer
        )

        assert signed.status == ContractStatus.SIGNED
        assert signed.signature == "Alex Doe"
        assert signed.updatedAt == "2026-10-19T12:00:30.000Z"
        assert service.get_contract(contract.id, photographer).status == ContractStatus.SIGNED

    def test_long_typed_signature_is_accepted(self, service, photographer):
        contract = service.create_contract(make_create(), photographer)
        name = "Alexandra " * 40

        signed = service.sign_contract(
            contract.id, SignatureRequest(signature=name, mode="type"), photographer
        )

        assert signed.signature == name.strip()

    def test_drawn_signature(self, service, photographer):
        contract = service.create_contract(make_create(), photographer)

        signed = service.sign_contract(
            contract.id, SignatureRequest(signature=SIGNATURE_PNG), photographer
        )

        assert signed.signature == SIGNATURE_PNG

    @pytest.mark.parametrize(
        "signature,mode",
        [
            ("", None),
            ("   ", "type"),
            ("data:image/png;base64,", "draw"),
            ("data:image/png;base64,***", None),
            ("Alex Doe", "draw"),
        ],
    )
    def test_invalid_signature_keeps_draft(self, service, photographer, signature, mode):
        contract = service.create_contract(make_create(), photographer)

        with pytest.raises(HTTPException) as exc_info:
            service.sign_contract(
                contract.id, SignatureRequest(signature=signature, mode=mode), photographer
            )

        assert exc_info.value.status_code == 400
        stored = service.get_contract(contract.id, photographer)
        assert stored.status == ContractStatus.DRAFT
        assert stored.signature is None

    def test_signing_twice_is_rejected(self, service, photographer):
        contract = service.create_contract(make_create(), photographer)
        service.sign_contract(contract.id, SignatureRequest(signature="Alex Doe"), photographer)

        with pytest.raises(HTTPException) as exc_info:
            service.sign_contract(contract.id, SignatureRequest(signature="Someone Else"), photographer)

        assert exc_info.value.status_code == 409
        assert service.get_contract(contract.id, photographer).signature == "Alex Doe"

    def test_update_never_reverts_status(self, service, photographer):
        contract = service.create_contract(make_create(), photographer)
        service.sign_contract(contract.id, SignatureRequest(signature="Alex Doe"), photographer)

        updated = service.update_contract(
            contract.id, ContractUpdate(content="<p>Amended</p>"), photographer
        )

        assert updated.status == ContractStatus.SIGNED
        assert updated.signature == "Alex Doe"

    def test_sign_unknown_contract(self, service, photographer):
        with pytest.raises(HTTPException) as exc_info:
            service.sign_contract("missing", SignatureRequest(signature="x"), photographer)
        assert exc_info.value.status_code == 404


class TestClockStep:
    """IDs follow the clock when it advances between creations"""

    def test_ids_follow_clock(self, storage, photographer):
        service = ContractService(storage, clock=FakeClock(step_ms=250))

        first = service.create_contract(make_create(), photographer)
        second = service.create_contract(make_create(), photographer)

        assert int(second.id) - int(first.id) == 250
