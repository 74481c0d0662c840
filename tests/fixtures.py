"""
Shared dataset fixtures for the region taxonomy tests.

Datasets are written as real YAML files into temporary directories so the
tests exercise the same file layout as production data.
"""

import copy
from pathlib import Path
from typing import Any, Dict

import yaml


BASE_FILES: Dict[str, Any] = {
    'world.yml': [
        {'type': 'country', 'alpha_2_code': 'US', 'alpha_3_code': 'USA', 'numeric_code': '840'},
        {'type': 'country', 'alpha_2_code': 'CA', 'alpha_3_code': 'CAN', 'numeric_code': '124'},
    ],
    'world/us.yml': [
        {'type': 'state', 'code': 'IL'},
        {'type': 'state', 'code': 'CA'},
        {'type': 'district', 'code': 'DC'},
    ],
    'world/us/il.yml': [
        {'type': 'county', 'code': 'COOK'},
    ],
    'world/ca.yml': [
        {'type': 'province', 'code': 'ON'},
        {'type': 'province', 'code': 'QC'},
    ],
}

EN_LOCALE: Dict[str, Any] = {
    'en': {
        'world': {
            'name': 'World',
            'us': {
                'name': 'United States',
                'official_name': 'United States of America',
                'il': {'name': 'Illinois', 'cook': {'name': 'Cook County'}},
                'ca': {'name': 'California'},
                'dc': {'name': 'District of Columbia'},
            },
            'ca': {
                'name': 'Canada',
                'on': {'name': 'Ontario'},
                'qc': {'name': 'Quebec'},
            },
        }
    }
}

FR_LOCALE: Dict[str, Any] = {
    'fr': {
        'world': {
            'us': {'name': 'États-Unis', 'il': {'name': 'Illinois'}},
            'ca': {'name': 'Canada', 'qc': {'name': 'Québec'}},
        }
    }
}


def write_yaml(path: Path, data: Any):
    """Write data as YAML, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as handle:
        yaml.safe_dump(data, handle, allow_unicode=True, sort_keys=False)


def write_dataset(root: Path, files: Dict[str, Any]) -> Path:
    """Write ``{relative path: data}`` below ``root`` and return ``root``."""
    for rel_path, data in files.items():
        write_yaml(root.joinpath(*rel_path.split('/')), data)
    return root


def build_base_dataset(root: Path, with_french: bool = False) -> Path:
    """Write the base region files and English locale below ``root``."""
    write_dataset(root, copy.deepcopy(BASE_FILES))
    write_yaml(root / 'locale' / 'en' / 'world.yml', EN_LOCALE)
    if with_french:
        write_yaml(root / 'locale' / 'fr' / 'world.yml', FR_LOCALE)
    return root
