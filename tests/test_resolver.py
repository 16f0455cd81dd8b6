from datetime import date

import pytest

from welfare_registry.models.entities import Family, FamilyCategoryEnum, FamilyMember, MemberNeeds
from welfare_registry.services.outcomes import Level, Missing
from welfare_registry.services.resolver import ResolvedChain, resolve, resolve_health


def _seed(db_session):
    family = Family(family_category=FamilyCategoryEnum.widows)
    other_family = Family(family_category=FamilyCategoryEnum.elderly)
    db_session.add_all([family, other_family])
    db_session.flush()

    members = []
    for index, owner in enumerate((family, family, other_family)):
        member = FamilyMember(
            family_id=owner.id,
            first_name="Layla",
            last_name="Nasser",
            address="7 Market Road",
            email=f"layla{index}@example.com",
            date_of_birth=date(1980, 1, 1),
            phone_number="0591234567",
            is_working=False,
            proficient="cooking",
            education_level="primary",
        )
        db_session.add(member)
        members.append(member)
    db_session.flush()

    need = MemberNeeds(family_id=family.id, family_member_id=members[0].id, need_name="food", member_priority=1)
    db_session.add(need)
    db_session.commit()
    return family, other_family, members, need


def test_full_chain_resolves(store, db_session):
    family, _, members, need = _seed(db_session)

    with store.transaction() as db:
        chain = resolve(db, family.id, members[0].id, need.id)

        assert isinstance(chain, ResolvedChain)
        assert chain.family.id == family.id
        assert chain.member.id == members[0].id
        assert chain.need.id == need.id


def test_missing_family_short_circuits(store, db_session, executed_statements):
    _, _, members, need = _seed(db_session)
    executed_statements.clear()

    with store.transaction() as db:
        outcome = resolve(db, 404, members[0].id, need.id)

    assert outcome == Missing(Level.family)
    selects = [statement for statement in executed_statements if statement.lstrip().upper().startswith("SELECT")]
    assert len(selects) == 1
    assert "families" in selects[0]


def test_missing_member_stops_before_needs(store, db_session, executed_statements):
    family, _, _, need = _seed(db_session)
    executed_statements.clear()

    with store.transaction() as db:
        outcome = resolve(db, family.id, 999, need.id)

    assert outcome == Missing(Level.member)
    selects = [statement for statement in executed_statements if statement.lstrip().upper().startswith("SELECT")]
    assert len(selects) == 2
    assert not any("member_needs" in statement for statement in selects)


def test_member_of_another_family_is_missing(store, db_session):
    family, _, members, _ = _seed(db_session)

    with store.transaction() as db:
        assert resolve(db, family.id, members[2].id) == Missing(Level.member)


def test_need_must_match_both_ancestors(store, db_session):
    family, _, members, need = _seed(db_session)

    with store.transaction() as db:
        # Right family, wrong member: the compound predicate rejects it.
        assert resolve(db, family.id, members[1].id, need.id) == Missing(Level.need)
        assert resolve(db, family.id, members[0].id, need.id + 100) == Missing(Level.need)


def test_health_chain_reports_missing_record(store, db_session):
    family, _, members, _ = _seed(db_session)

    with store.transaction() as db:
        assert resolve_health(db, family.id, members[0].id, 55) == Missing(Level.health_record)


def test_identifiers_must_be_given_root_first(store):
    with store.transaction() as db:
        with pytest.raises(ValueError):
            resolve(db, 1, None, 3)
