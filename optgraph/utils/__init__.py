"""Small shared helpers."""

from optgraph.utils.ids import allocate_id, new_random_id
from optgraph.utils.yaml_utils import normalize_yaml_dict_keys, yaml_name

__all__ = ["allocate_id", "new_random_id", "normalize_yaml_dict_keys", "yaml_name"]
