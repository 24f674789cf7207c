#!/usr/bin/env python
#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# To use this, install with:
#
#   pip install --editable '.[cli]'
#
# That will create the command "urreg" in your path.
#
#
import click, sys, json
from binascii import a2b_hex
from cbor2 import CBORDecodeError

import urreg.registry as registry
from urreg.registry import CATALOG, decode_to_data_item, decode_item
from urreg.exceptions import RegistryError
from urreg.utils import uuid_to_bytes, bytes_to_uuid, B2A
from urreg import __version__

# Cleanup display (supress traceback) for user-feedback exceptions
_sys_excepthook = sys.excepthook
def my_hook(ty, val, tb):
    if issubclass(ty, (RegistryError, CBORDecodeError)):
        print("FATAL: %s" % val, file=sys.stderr)
    else:
        return _sys_excepthook(ty, val, tb)
sys.excepthook=my_hook

def fail(msg):
    # show message and stop
    click.echo(f"FAILURE: {msg}", err=True)
    sys.exit(1)

def dump_dict(d, indent=0):
    # show nested record contents, bytes already as hex
    pad = '  ' * indent
    for k,v in d.items():
        if isinstance(v, dict):
            click.echo(f'{pad}{k}:')
            dump_dict(v, indent+1)
        elif isinstance(v, list) and v and isinstance(v[0], dict):
            click.echo(f'{pad}{k}: ({len(v)})')
            for n, i in enumerate(v):
                click.echo(f'{pad}  [{n}]')
                dump_dict(i, indent+2)
        else:
            click.echo(f'{pad}{k}: {v}')

# Accept any prefix of a command name.
#
# from <https://click.palletsprojects.com/en/8.0.x/advanced/?#command-aliases>
class AliasedGroup(click.Group):
    def get_command(self, ctx, cmd_name):
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        matches = [x for x in self.list_commands(ctx)
                   if x.startswith(cmd_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        ctx.fail(f"Abiguous command. Pick one of: {' | '.join(sorted(matches))}")

    def resolve_command(self, ctx, args):
        # always return the full command name
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name, cmd, args


@click.group(cls=AliasedGroup)
@click.option('--verbose', '-v', is_flag=True,
                    help="Show CBOR bytes as they are encoded/decoded.")
@click.version_option(version=__version__)
def main(verbose):
    '''
    Inspect records exchanged with air-gapped signing devices.
    '''
    registry.VERBOSE = verbose

@main.command('tags')
def list_tags():
    "List all known registry types and their CBOR tags"
    for rt in CATALOG:
        try:
            cls = CATALOG.item_class(rt.tag).__name__
        except RegistryError:
            cls = '-'
        click.echo(f'{rt.tag:6d}  {rt.name:48s} {cls}')

@main.command('decode')
@click.argument('payload', type=str, metavar="HEX")
@click.option('--type', '-t', 'type_name', default=None, metavar="cardano-sign-request",
                    help="Registry type of payload; needed when payload is not tagged")
@click.option('--strict', '-s', is_flag=True,
                    help="Reject nested items which are not tagged")
@click.option('--json', '-j', 'as_json', is_flag=True, help="Output as JSON")
def decode_payload(payload, type_name, strict, as_json):
    "Decode a CBOR payload (hex) into a record and show its fields"
    try:
        buf = a2b_hex(''.join(payload.split()))
    except ValueError:
        fail("Payload must be hex")

    item = decode_to_data_item(buf)

    if type_name:
        rec = CATALOG.item_class(type_name).from_data_item(item, strict=strict)
    else:
        rec = decode_item(item, strict=strict)

    if as_json:
        click.echo(json.dumps(dict(type=rec.registry_type.name, **rec.as_dict()), indent=2))
        return

    click.echo(f'{rec.registry_type.name} (tag {rec.registry_type.tag})')
    d = rec.as_dict()
    if 'request_id' in d:
        d['request_id'] += ' (%s)' % bytes_to_uuid(rec.request_id)
    dump_dict(d, indent=1)

@main.command('uuid')
@click.argument('text', type=str, metavar="UUID")
def show_uuid(text):
    "Show binary (hex) form of a request id"
    try:
        click.echo(B2A(uuid_to_bytes(text)))
    except ValueError as exc:
        fail(str(exc))

if __name__ == '__main__':
    main()

# EOF
