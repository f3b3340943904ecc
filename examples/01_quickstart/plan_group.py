"""
Plan a Group Change

Renders two versions of a databricks_group configuration and shows the
change set between them. Runs offline: no workspace calls are made.
"""

from groupform import GroupResourceHandler, compute_diff, parse_config, render_group_config
from groupform.testing import rand_string_from_charset

suffix = rand_string_from_charset(5)
address = "databricks_group.my_group"

before = parse_config(render_group_config(f"tf group test {suffix}", "true", "true"))[address]
after = parse_config(render_group_config(f"new tf group test {suffix}"))[address]

# normalize() only validates arguments, so no client is needed here
handler = GroupResourceHandler(client=None)
change = compute_diff(
    address,
    handler.normalize(before.arguments),
    handler.normalize(after.arguments),
    handler.schema,
)

print(change)
print(f"\nEmpty plan: {change.is_empty}")

# Output example:
# REPLACE databricks_group.my_group
#     display_name: "tf group test a1B2c" => "new tf group test a1B2c" (forces new resource)
#     allow_cluster_create: "true" => "false"
#     allow_instance_pool_create: "true" => "false"
#
# Empty plan: False
