from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from welfare_registry.models.entities import Family, FamilyMember, HealthHistory, MemberNeeds
from welfare_registry.services import cascade, records
from welfare_registry.services.outcomes import InternalFailure, Level, Missing, Rejected, RejectReason, Success
from welfare_registry.services.resolver import ResolvedChain

FAMILY_FIELDS = {"house_condition": "string", "notes": "string", "family_category": "Orphans"}


def _count(db_session, model) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


def test_create_family_attaches_members_in_supplied_order(store, member_payload):
    members = [member_payload(first_name="First"), member_payload(first_name="Second")]

    outcome = cascade.create_family_with_members(store, FAMILY_FIELDS, members)

    assert isinstance(outcome, Success)
    family = outcome.payload
    assert [member.first_name for member in family.members] == ["First", "Second"]
    assert {member.family_id for member in family.members} == {family.id}


def test_empty_member_list_writes_nothing(store, db_session):
    outcome = cascade.create_family_with_members(store, FAMILY_FIELDS, [])

    assert outcome == Rejected(RejectReason.empty_members)
    assert _count(db_session, Family) == 0


def test_one_invalid_member_aborts_the_whole_family(store, db_session, member_payload):
    members = [member_payload(), member_payload(), member_payload(email="not-an-email")]

    outcome = cascade.create_family_with_members(store, FAMILY_FIELDS, members)

    assert isinstance(outcome, Rejected)
    assert outcome.reason == RejectReason.invalid_fields
    assert outcome.errors
    assert _count(db_session, Family) == 0
    assert _count(db_session, FamilyMember) == 0


def test_duplicate_email_inside_one_cascade_rolls_back(store, db_session, member_payload):
    members = [member_payload(email="same@example.com"), member_payload(email="SAME@example.com")]

    outcome = cascade.create_family_with_members(store, FAMILY_FIELDS, members)

    assert isinstance(outcome, Rejected)
    assert outcome.reason == RejectReason.constraint_violation
    assert _count(db_session, Family) == 0
    assert _count(db_session, FamilyMember) == 0


def test_storage_failure_mid_cascade_leaves_no_rows(store, db_session, member_payload, monkeypatch):
    real_insert = cascade.insert
    calls = []

    def flaky_insert(db, model, fields):
        calls.append(model)
        if model is FamilyMember and len(calls) == 3:
            raise OperationalError("INSERT INTO family_members", {}, Exception("connection lost"))
        return real_insert(db, model, fields)

    monkeypatch.setattr(cascade, "insert", flaky_insert)

    outcome = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload(), member_payload()])

    assert isinstance(outcome, InternalFailure)
    assert outcome.operation == "add family with members"
    assert _count(db_session, Family) == 0
    assert _count(db_session, FamilyMember) == 0


def test_delete_family_removes_the_whole_subtree(store, db_session, member_payload):
    created = cascade.create_family_with_members(
        store, FAMILY_FIELDS, [member_payload() for _ in range(3)]
    ).payload
    kept = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload()]).payload

    for member in created.members + kept.members:
        for index in range(2):
            cascade.add_member_need(store, member.family_id, member.id, {"need_name": f"need {index}"})
        cascade.add_health_record(store, member.family_id, member.id, {"condition_name": "checkup"})

    outcome = cascade.delete_family(store, created.id)

    assert isinstance(outcome, Success)
    assert outcome.payload.families == 1
    assert outcome.payload.members == 3
    assert outcome.payload.needs == 6
    assert outcome.payload.health_records == 3

    deleted_ids = [member.id for member in created.members]
    assert db_session.execute(
        select(func.count()).select_from(MemberNeeds).where(MemberNeeds.family_member_id.in_(deleted_ids))
    ).scalar_one() == 0
    assert db_session.execute(
        select(func.count()).select_from(HealthHistory).where(HealthHistory.family_member_id.in_(deleted_ids))
    ).scalar_one() == 0
    assert _count(db_session, MemberNeeds) == 2
    assert _count(db_session, HealthHistory) == 1
    assert _count(db_session, FamilyMember) == 1


def test_lookups_after_family_delete_report_missing(store, member_payload):
    family = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload(), member_payload()]).payload
    member_id = family.members[0].id
    need = cascade.add_member_need(store, family.id, member_id, {"need_name": "food", "member_priority": 1}).payload

    assert isinstance(cascade.delete_family(store, family.id), Success)

    assert records.get_member(store, family.id, member_id) == Missing(Level.family)
    assert records.get_member_need(store, family.id, member_id, need.id) == Missing(Level.family)


def test_delete_missing_family_reports_missing(store):
    assert cascade.delete_family(store, 62326) == Missing(Level.family)


def test_delete_member_keeps_siblings(store, db_session, member_payload):
    family = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload(), member_payload()]).payload
    leaving, staying = family.members
    cascade.add_member_need(store, family.id, leaving.id, {"need_name": "rent"})
    cascade.add_member_need(store, family.id, staying.id, {"need_name": "rent"})

    outcome = cascade.delete_member(store, family.id, leaving.id)

    assert outcome.payload.members == 1
    assert outcome.payload.needs == 1
    remaining = records.list_members(store, family.id).payload
    assert [member.id for member in remaining] == [staying.id]
    assert _count(db_session, MemberNeeds) == 1


def test_add_member_to_missing_family(store, member_payload):
    assert cascade.add_member(store, 999, member_payload()) == Missing(Level.family)


def test_add_member_with_taken_email(store, member_payload):
    family = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload(email="a@example.com")]).payload

    outcome = cascade.add_member(store, family.id, member_payload(email="a@example.com"))

    assert isinstance(outcome, Rejected)
    assert outcome.reason == RejectReason.constraint_violation


def _already_gone(*rows):
    """Stand in for a resolve that raced with another transaction's delete."""
    levels = (Level.family, Level.member, Level.need)

    def resolved(db, *ids):
        return ResolvedChain(dict(zip(levels, rows)))

    return resolved


def test_delete_family_removed_concurrently_reports_missing(store, monkeypatch):
    monkeypatch.setattr(cascade, "resolve", _already_gone(Family(id=77)))

    assert cascade.delete_family(store, 77) == Missing(Level.family)


def test_delete_need_removed_concurrently_reports_missing(store, member_payload, monkeypatch):
    family = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload()]).payload
    member = family.members[0]
    monkeypatch.setattr(
        cascade,
        "resolve",
        _already_gone(Family(id=family.id), FamilyMember(id=member.id), MemberNeeds(id=404)),
    )

    assert cascade.delete_member_need(store, family.id, member.id, 404) == Missing(Level.need)


def test_delete_health_record_removed_concurrently_reports_missing(store, member_payload, monkeypatch):
    family = cascade.create_family_with_members(store, FAMILY_FIELDS, [member_payload()]).payload
    member = family.members[0]
    monkeypatch.setattr(
        cascade,
        "resolve_health",
        lambda db, *ids: ResolvedChain(
            {Level.family: Family(id=family.id), Level.member: FamilyMember(id=member.id), Level.health_record: None}
        ),
    )

    assert cascade.delete_health_record(store, family.id, member.id, 404) == Missing(Level.health_record)
