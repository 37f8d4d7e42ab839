import pytest

from varpick.application.flattener import available_addresses, build_sections, flatten, menu_order
from varpick.domain.catalog import CatalogNode, parse_catalog
from varpick.domain.types import ItemGroup


def test_nested_leaf_gets_dotted_address_and_parent_group(user_catalog):
    items = flatten(user_catalog)

    assert len(items) == 1
    item = items[0]
    assert item.address == "user.first_name"
    assert item.title == "First Name"
    assert item.group == ItemGroup(address="user", title="User")


def test_leaf_only_by_default(mixed_catalog):
    assert available_addresses(mixed_catalog) == [
        "company.name",
        "company.address.street",
        "company.address.city",
        "company.phone",
        "today",
        "user.first_name",
        "user.last_name",
    ]


def test_parents_precede_their_descendants(mixed_catalog):
    addresses = available_addresses(mixed_catalog, include_parent_nodes=True)

    assert addresses == [
        "company",
        "company.name",
        "company.address",
        "company.address.street",
        "company.address.city",
        "company.phone",
        "today",
        "user",
        "user.first_name",
        "user.last_name",
    ]


def test_parent_node_is_not_its_own_group(mixed_catalog):
    by_address = {item.address: item for item in flatten(mixed_catalog, include_parent_nodes=True)}

    assert by_address["company"].group is None
    assert by_address["company.address"].group == ItemGroup("company", "Company")
    assert by_address["company.address.city"].group == ItemGroup("company.address", "Address")


def test_top_level_leaf_is_ungrouped(mixed_catalog):
    today = next(item for item in flatten(mixed_catalog) if item.address == "today")

    assert today.group is None
    assert today.description == "Current date"


def test_flatten_is_deterministic(mixed_catalog):
    assert flatten(mixed_catalog) == flatten(mixed_catalog)
    assert flatten(mixed_catalog, True) == flatten(mixed_catalog, True)


def test_leaf_addresses_subset_of_parent_addresses(mixed_catalog):
    leaves = available_addresses(mixed_catalog)
    everything = available_addresses(mixed_catalog, include_parent_nodes=True)

    assert set(leaves) <= set(everything)
    # relative order of the leaves is unchanged
    assert [a for a in everything if a in leaves] == leaves


def test_reused_keys_in_different_branches_get_distinct_addresses():
    catalog = parse_catalog(
        {
            "billing": {"title": "Billing", "children": {"name": {"title": "Name"}}},
            "shipping": {"title": "Shipping", "children": {"name": {"title": "Name"}}},
        }
    )

    addresses = available_addresses(catalog)

    assert addresses == ["billing.name", "shipping.name"]
    assert len(set(addresses)) == len(addresses)


def test_empty_title_falls_back_to_key():
    catalog = parse_catalog({"user": {"title": "", "children": {"email": {"title": ""}}}})

    items = flatten(catalog, include_parent_nodes=True)

    assert [item.title for item in items] == ["user", "email"]
    assert items[1].group.title == "user"


def test_malformed_or_empty_children_are_leaves():
    catalog = parse_catalog(
        {
            "broken": {"title": "Broken", "children": 42},
            "empty": {"title": "Empty", "children": {}},
        }
    )

    assert available_addresses(catalog) == ["broken", "empty"]


def test_empty_catalog_yields_nothing():
    assert flatten({}) == []
    assert build_sections([]) == []


def test_deep_nesting_does_not_recurse():
    depth = 5000
    node = CatalogNode.model_construct(title="leaf", description=None, children=None)
    for level in range(depth - 1, 0, -1):
        node = CatalogNode.model_construct(title=f"n{level}", description=None, children={f"k{level}": node})
    catalog = {"k0": node}

    items = flatten(catalog, include_parent_nodes=True)

    assert len(items) == depth
    assert items[-1].address.count(".") == depth - 1


def test_sections_put_ungrouped_first_then_groups_in_discovery_order(mixed_catalog):
    sections = build_sections(flatten(mixed_catalog), ungrouped_title="General")

    assert [section.title for section in sections] == ["General", "Company", "Address", "User"]
    assert sections[0].group is None
    assert [item.address for item in sections[0].items] == ["today"]
    assert [item.address for item in sections[1].items] == ["company.name", "company.phone"]
    assert [item.address for item in sections[2].items] == ["company.address.street", "company.address.city"]


def test_every_group_is_contiguous_in_menu_order(mixed_catalog):
    for include_parents in (False, True):
        order = menu_order(build_sections(flatten(mixed_catalog, include_parents)))
        seen_groups: list[str] = []
        for item in order:
            key = item.group.address if item.group else None
            if key is None:
                continue
            if not seen_groups or seen_groups[-1] != key:
                assert key not in seen_groups
                seen_groups.append(key)


def test_menu_order_contains_every_item_once(mixed_catalog):
    items = flatten(mixed_catalog, include_parent_nodes=True)

    order = menu_order(build_sections(items))

    assert sorted(item.address for item in order) == sorted(item.address for item in items)


@pytest.mark.parametrize("include_parents", [False, True])
def test_no_address_collisions(mixed_catalog, include_parents):
    addresses = available_addresses(mixed_catalog, include_parents)

    assert len(addresses) == len(set(addresses))
