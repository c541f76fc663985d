import itertools
from copy import deepcopy
from io import TextIOWrapper

import yaml


def _merge_dot_keys(config: dict) -> dict:
    """merge keys with dot notation into the dictionary"""

    # if there are no keys with dot notation, return the original dictionary
    if not any(key for key in config.keys() if "." in key):
        return config

    # nested dictionaries are shared with the defaults of other runs
    config = deepcopy(config)

    keys_to_delete = []
    # new prefixes are added to config while walking the dot keys
    for key, value in list(config.items()):
        if "." in key:
            keys = key.split(".")
            last_key = keys[-1]
            current = config
            for k in keys[:-1]:
                if k not in current:
                    current[k] = {}
                current = current[k]

            match current.get(last_key):
                case dict():
                    current[last_key].update(value)
                case _:
                    current[last_key] = value

            keys_to_delete.append(key)

    for key in keys_to_delete:
        del config[key]

    return config


def _expand_grid(one_config_raw: dict | None, defaults: dict) -> list[dict]:
    if one_config_raw is None:
        one_config_raw = {}
    grid_params = one_config_raw.get("grid", None) or []
    local_defaults = one_config_raw.get("defaults", None) or {}

    defaults = defaults.copy()
    defaults.update(local_defaults)

    if not grid_params:
        return [defaults]

    # every grid entry contributes the cartesian product of its values
    grid_dicts = []
    for grid_entry in grid_params:
        grid_combinations = list(itertools.product(*grid_entry.values()))

        grid_dicts += [
            dict(zip(grid_entry.keys(), combination))
            for combination in grid_combinations
        ]

    configurations = []
    for comb in grid_dicts:
        config = defaults.copy()
        config.update(comb)
        configurations.append(config)

    return configurations


def _build_config(one_config_raw: dict, defaults: dict) -> list[dict]:
    run_defaults = defaults.get("run", None) or {}
    run_configs = _expand_grid(one_config_raw.get("run", None), run_defaults)
    run_configs = [_merge_dot_keys(config) for config in run_configs]

    return [
        {"run": config, "skip": one_config_raw.get("skip", False)}
        for config in run_configs
    ]


def read_config(filepath: str) -> list[dict]:
    with open(filepath) as f:
        return read_config_from_stream(f)


def read_config_from_stream(f: TextIOWrapper) -> list[dict]:
    """Expand a YAML experiment file into one dictionary per run.

    The file has a ``defaults`` section and a list of ``configs``. Each config
    may override the defaults and give a ``grid`` of values whose cartesian
    product is expanded into separate runs. Configs with ``skip: true`` are
    dropped.
    """
    config_raw = yaml.safe_load(f)

    defaults = config_raw["defaults"]
    all_configs_raw = config_raw.get("configs", None) or [{}]
    all_configs = []
    for one_config_raw in all_configs_raw:
        configs = _build_config(one_config_raw, defaults)
        for config in configs:
            if not config["skip"]:
                all_configs.append(config)

    return all_configs
