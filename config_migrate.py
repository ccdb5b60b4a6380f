# File: config_migrate.py
"""
config_migrate.py

On startup, loads config.json for the log console:
- If config.json is missing, writes a default template and exits.
- Fills in any missing keys with defaults and writes the file back.
- Legacy node_watch configs carry 'tail_lines'; it becomes 'log_buffer_size' and the
  old file is backed up to config_old.json (or config_old_N.json).
- validate_config() rejects wrongly typed values with a message on stderr.
"""
import json
import sys
from pathlib import Path

DEFAULTS = {
    'resource': 'myproject/web',
    'log_buffer_size': 200,
    'refresh_rate_ms': 200,
    'max_cleanse': 100,
    'event_log': 'logview.log',
    'debug': False,
    'version_api': '',
}

REQUIRED = [
    ('resource', str),
    ('log_buffer_size', int),
    ('refresh_rate_ms', (int, float)),
    ('max_cleanse', int),
    ('event_log', str),
    ('debug', bool),
    ('version_api', str),
]


def _backup(p: Path) -> Path:
    backup = p.with_name('config_old.json')
    idx = 1
    while backup.exists():
        backup = p.with_name(f'config_old_{idx}.json')
        idx += 1
    p.rename(backup)
    return backup


def migrate_config(path='config.json'):
    p = Path(path)
    if not p.exists():
        p.write_text(json.dumps(DEFAULTS, indent=2))
        print(f"Created default config at '{path}'. Please edit and re-run.")
        sys.exit(0)

    raw = json.loads(p.read_text())

    # Legacy format: node_watch style config with 'tail_lines'
    if 'tail_lines' in raw and 'log_buffer_size' not in raw:
        new_cfg = {k: raw.get(k, v) for k, v in DEFAULTS.items()}
        new_cfg['log_buffer_size'] = int(raw['tail_lines'])
        if 'resource' not in raw and raw.get('containers'):
            new_cfg['resource'] = raw['containers'][0]
        backup = _backup(p)
        p.write_text(json.dumps(new_cfg, indent=2))
        print(f"Migrated old config to {backup.name}, wrote new {p.name}")
        return new_cfg

    updated = False
    for key, value in DEFAULTS.items():
        if key not in raw:
            raw[key] = value
            updated = True
    if updated:
        p.write_text(json.dumps(raw, indent=2))
        print(f"Updated config '{path}' with missing keys. Please review.")
    return raw


def validate_config(cfg):
    for key, expected in REQUIRED:
        if key not in cfg or not isinstance(cfg[key], expected) or (expected is int and isinstance(cfg[key], bool)):
            print(f"Config error: '{key}' missing or not of type {expected}", file=sys.stderr)
            sys.exit(1)
    if cfg['log_buffer_size'] < 1:
        print("Config error: 'log_buffer_size' must be at least 1", file=sys.stderr)
        sys.exit(1)
    if cfg['refresh_rate_ms'] <= 0:
        print("Config error: 'refresh_rate_ms' must be positive", file=sys.stderr)
        sys.exit(1)
    return cfg


if __name__ == '__main__':
    validate_config(migrate_config())
