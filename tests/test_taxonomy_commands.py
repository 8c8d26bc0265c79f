"""Term chain resolution and term lookup."""

import pytest

from adapters.json_exporter import to_jsonable
from core.domain.errors import BindingError, NotFoundError
from core.domain.models import Term, TermGroup, TermSet, TermStore
from core.interfaces.writer import ListWriter
from core.services.taxonomy_commands import GetTerm, GetTermGroup, GetTermSet

from conftest import GROUP_ID, SET_ID, SET_PATH, STORE_PATH, term

TERM_ID = "ab2af486-e097-4b4a-9444-527b251f1f8d"


def _run(command):
    writer = ListWriter()
    command.execute(writer)
    return writer.results


def _get_term(session, **kwargs):
    kwargs.setdefault("term_set", "Departments")
    kwargs.setdefault("term_group", "Corporate")
    return _run(GetTerm(session, **kwargs))


def test_without_identity_lists_all_terms_with_default_projection(session, taxonomy):
    taxonomy.collection(
        f"{SET_PATH}/children",
        [
            term("t1", "Finance", createdDateTime="2020-01-01T00:00:00Z"),
            term("t2", "HR", createdDateTime="2020-01-02T00:00:00Z"),
        ],
    )

    results = _get_term(session)

    assert [t.name for t in results] == ["Finance", "HR"]
    [params] = taxonomy.params_for(f"{SET_PATH}/children")
    assert params["$select"] == "id,labels"
    assert set(to_jsonable(results[0])) == {"id", "labels"}
    assert taxonomy.paths == [
        STORE_PATH,
        f"{STORE_PATH}/groups",
        f"{STORE_PATH}/groups/{GROUP_ID}/sets",
        f"{SET_PATH}/children",
    ]


def test_fields_override_the_projection(session, taxonomy):
    taxonomy.collection(f"{SET_PATH}/children", [term("t1", "Finance", createdDateTime="2020-01-01T00:00:00Z")])

    [result] = _get_term(session, fields=["Id", "CreatedDate"])

    [params] = taxonomy.params_for(f"{SET_PATH}/children")
    assert params["$select"] == "id,createdDateTime"
    assert to_jsonable(result) == {"id": "t1", "createdDateTime": "2020-01-01T00:00:00Z"}


def test_recursive_lookup_returns_only_the_first_match(session, taxonomy):
    taxonomy.collection(
        f"{SET_PATH}/children",
        [term("t1", "Finance"), term("t3", "Small Finance", childrenCount=0)],
    )
    taxonomy.collection(f"{SET_PATH}/terms/t1/children", [term("t2", "Small Finance", childrenCount=0)])
    taxonomy.add(f"{SET_PATH}/terms/t2", term("t2", "Small Finance"))

    results = _get_term(session, identity="Small Finance", recursive=True)

    assert len(results) == 1
    assert results[0].id == "t2"
    assert f"{SET_PATH}/terms/t3/children" not in taxonomy.paths


def test_recursive_lookup_trims_unavailable_terms(session, taxonomy):
    taxonomy.collection(
        f"{SET_PATH}/children",
        [
            term("t1", "Small Finance", childrenCount=0, isAvailableForTagging=False),
            term("t2", "Small Finance", childrenCount=0),
        ],
    )
    taxonomy.add(f"{SET_PATH}/terms/t2", term("t2", "Small Finance"))

    [result] = _get_term(session, identity="Small Finance", recursive=True)

    assert result.id == "t2"


def test_recursive_lookup_normalizes_the_label(session, taxonomy):
    taxonomy.collection(f"{SET_PATH}/children", [term("t1", "R&D", childrenCount=0)])
    taxonomy.add(f"{SET_PATH}/terms/t1", term("t1", "R&D"))

    [result] = _get_term(session, identity="R&D", recursive=True)

    assert result.id == "t1"


def test_recursive_lookup_loads_the_match_with_the_selected_fields(session, taxonomy):
    taxonomy.collection(
        f"{SET_PATH}/children",
        [term("t1", "Finance", childrenCount=0, createdDateTime="2020-01-01T00:00:00Z")],
    )
    taxonomy.add(f"{SET_PATH}/terms/t1", {"id": "t1", "createdDateTime": "2020-01-01T00:00:00Z"})

    [result] = _get_term(session, identity="Finance", recursive=True, fields=["Id", "CreatedDate"])

    [params] = taxonomy.params_for(f"{SET_PATH}/terms/t1")
    assert params["$select"] == "id,createdDateTime"
    assert to_jsonable(result) == {"id": "t1", "createdDateTime": "2020-01-01T00:00:00Z"}


def test_recursive_lookup_searches_below_unavailable_terms(session, taxonomy):
    taxonomy.collection(f"{SET_PATH}/children", [term("t1", "Small Finance", isAvailableForTagging=False)])
    taxonomy.collection(f"{SET_PATH}/terms/t1/children", [term("t2", "Small Finance", childrenCount=0)])
    taxonomy.add(f"{SET_PATH}/terms/t2", term("t2", "Small Finance"))

    [result] = _get_term(session, identity="Small Finance", recursive=True)

    assert result.id == "t2"
    assert f"{SET_PATH}/terms/t1" not in taxonomy.paths


def test_name_lookup_without_recursive_only_sees_top_level_terms(session, taxonomy):
    taxonomy.collection(f"{SET_PATH}/children", [term("t1", "Finance")])
    taxonomy.collection(f"{SET_PATH}/terms/t1/children", [term("t2", "Small Finance")])

    [result] = _get_term(session, identity="finance")
    assert result.id == "t1"

    with pytest.raises(NotFoundError):
        _get_term(session, identity="Small Finance")
    assert f"{SET_PATH}/terms/t1/children" not in taxonomy.paths


def test_name_lookup_projects_away_labels_when_not_requested(session, taxonomy):
    taxonomy.collection(f"{SET_PATH}/children", [term("t1", "Finance")])

    [result] = _get_term(session, identity="Finance", fields=["Id"])

    [params] = taxonomy.params_for(f"{SET_PATH}/children")
    assert params["$select"] == "id,labels"
    assert to_jsonable(result) == {"id": "t1"}


def test_id_lookup_fetches_the_term_inside_the_set(session, taxonomy):
    taxonomy.add(f"{SET_PATH}/terms/{TERM_ID}", term(TERM_ID, "Finance"))

    [result] = _get_term(session, identity=TERM_ID.upper())

    assert isinstance(result, Term)
    assert result.id == TERM_ID
    [params] = taxonomy.params_for(f"{SET_PATH}/terms/{TERM_ID}")
    assert params["$select"] == "id,labels"


def test_missing_term_is_a_fault(session, taxonomy):
    with pytest.raises(NotFoundError) as excinfo:
        _get_term(session, identity=TERM_ID)
    assert excinfo.value.entity == "Term"


def test_unresolvable_term_group_is_a_fault(session, taxonomy):
    with pytest.raises(NotFoundError) as excinfo:
        _get_term(session, term_group="Missing")

    assert excinfo.value.entity == "Term group"
    assert not any("/sets" in p for p in taxonomy.paths)


def test_unresolvable_term_set_is_a_fault(session, taxonomy):
    with pytest.raises(NotFoundError) as excinfo:
        _get_term(session, term_set="33333333-3333-3333-3333-333333333333")

    assert excinfo.value.entity == "Term set"
    assert not any(p.endswith("/children") for p in taxonomy.paths)


def test_term_group_and_set_by_id(session, taxonomy):
    taxonomy.collection(f"{SET_PATH}/children", [])

    assert _get_term(session, term_group=GROUP_ID, term_set=SET_ID) == []
    assert taxonomy.paths == [STORE_PATH, f"{STORE_PATH}/groups/{GROUP_ID}", SET_PATH, f"{SET_PATH}/children"]


def test_handles_skip_lookups(session, graph):
    store = TermStore(id="store-2")
    group = TermGroup(id=GROUP_ID, displayName="Corporate")
    term_set = TermSet(id=SET_ID)
    set_path = f"sites/root/termStores/store-2/groups/{GROUP_ID}/sets/{SET_ID}"
    graph.collection(f"{set_path}/children", [term("t1", "Finance")])

    results = _get_term(session, term_store=store, term_group=group, term_set=term_set)

    assert [t.id for t in results] == ["t1"]
    assert graph.paths == [f"{set_path}/children"]


def test_missing_default_store_is_a_fault(session, graph):
    with pytest.raises(NotFoundError) as excinfo:
        _get_term(session)
    assert excinfo.value.entity == "Term store"


def test_term_store_by_name(session, graph):
    graph.collection("sites/root/termStores", [{"id": "store-a", "name": "Managed Metadata Service"}])
    graph.collection("sites/root/termStores/store-a/groups", [{"id": "g", "displayName": "Corporate"}])

    [group] = _run(GetTermGroup(session, identity="Corporate", term_store="managed metadata service"))

    assert group.id == "g"


def test_get_term_group_lists_all_groups(session, taxonomy):
    results = _run(GetTermGroup(session))
    assert [g.name for g in results] == ["People", "Corporate"]


def test_get_term_set_by_name_and_listing(session, taxonomy):
    [term_set] = _run(GetTermSet(session, term_group="Corporate", identity="departments"))
    assert term_set.id == SET_ID
    assert term_set.name == "Departments"

    assert [s.id for s in _run(GetTermSet(session, term_group="Corporate"))] == [SET_ID]


def test_handle_of_the_wrong_type_is_rejected(session):
    with pytest.raises(BindingError):
        GetTerm(session, term_set="Departments", term_group=TermSet(id=SET_ID))
