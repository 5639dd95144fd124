#!/usr/bin/env python3
"""
PianoQuest Firebase config tool.

Inspect the effective Firebase client configuration and create the
firebase_config.json template.

Usage:
    pianoquest-firebase show      # Print the effective config (apiKey masked)
    pianoquest-firebase check     # Exit 1 if keys are missing or placeholders remain
    pianoquest-firebase init      # Write firebase_config.json with placeholders
"""

import json
import argparse
import logging
from pathlib import Path

from pianoquest.firebase_config import (
    CONFIG_FILENAME,
    REQUIRED_KEYS,
    FirebaseConfigError,
    find_config_file,
    find_placeholder_fields,
    get_env_overrides,
    get_firebase_config,
    load_firebase_config,
    mask_secret,
)


def _load(args):
    config_path = Path(args.config) if args.config else None
    return load_firebase_config(config_path=config_path, use_env=not args.no_env)


def show_config(args) -> int:
    """Print the effective Firebase config."""
    try:
        config = _load(args)
    except (FirebaseConfigError, FileNotFoundError) as e:
        print(f"❌ {e}")
        return 1

    source = args.config or find_config_file() or "built-in defaults"

    print("\n" + "="*60)
    print("FIREBASE CONFIG")
    print("="*60)
    print(f"Source: {source}")
    if args.no_env:
        print("Environment overrides: disabled")
    else:
        overrides = get_env_overrides()
        if overrides:
            print(f"Environment overrides: {', '.join(sorted(overrides))}")
        else:
            print("Environment overrides: none")
    print()
    for key, value in config.items():
        shown = mask_secret(value) if key == "apiKey" else value
        print(f"  {key}: {shown}")
    print("="*60 + "\n")
    return 0


def check_config(args) -> int:
    """Report whether the config is usable. Returns the exit code."""
    try:
        config = _load(args)
    except FirebaseConfigError as e:
        print(f"❌ {e}")
        for key in e.keys:
            print(f"   - {key}")
        return 1
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1

    placeholders = find_placeholder_fields(config)
    if placeholders:
        print("⚠️  Firebase config still has placeholder values:")
        for key in placeholders:
            print(f"   - {key}: {config[key]}")
        print(f"\nFill them in {CONFIG_FILENAME} or set the FIREBASE_* environment variables.")
        return 1

    print(f"✅ Firebase config OK ({len(REQUIRED_KEYS)} required keys set, project {config['projectId']})")
    return 0


def init_config(args) -> int:
    """Write a firebase_config.json template."""
    output = Path(args.output)
    if output.exists() and not args.force:
        print(f"❌ {output} already exists. Use --force to overwrite.")
        return 1

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', encoding='utf-8') as f:
            json.dump(get_firebase_config(), f, indent=2)
            f.write("\n")
    except IOError as e:
        print(f"❌ Error writing {output}: {e}")
        return 1

    print(f"✅ Template saved to: {output}")
    print("   Replace the placeholder values with your project's web app config")
    print("   from https://console.firebase.google.com/ (Project settings > Your apps).")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pianoquest-firebase',
        description='Inspect and create the PianoQuest Firebase client config',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create firebase_config.json with placeholder values
  pianoquest-firebase init

  # Show the config the app will use
  pianoquest-firebase show

  # Fail (exit 1) when placeholders are still present
  pianoquest-firebase check --config path/to/firebase_config.json
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    for name, help_text in (('show', 'Show the effective config'),
                            ('check', 'Check for missing keys and placeholders')):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('--config', help=f'Path to {CONFIG_FILENAME} (default: search)')
        sub.add_argument('--no-env', action='store_true', help='Ignore FIREBASE_* environment variables')

    init_parser = subparsers.add_parser('init', help=f'Write a {CONFIG_FILENAME} template')
    init_parser.add_argument('--output', default=CONFIG_FILENAME, help='Where to write the template')
    init_parser.add_argument('--force', action='store_true', help='Overwrite an existing file')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if not args.command:
        parser.print_help()
        return 0

    if args.command == 'show':
        return show_config(args)
    elif args.command == 'check':
        return check_config(args)
    elif args.command == 'init':
        return init_config(args)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
