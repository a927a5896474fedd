#!/usr/bin/env python3
#
# CFDDNS
# (C) 2024 CFDDNS contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import click
import sys
import logging
import yaml
import os

from typing import Any, Dict

from cfddns.settings import CloudflareDefaultDomain, CloudflareDomain, CloudflareSettings, SettingsError

__all__ = ['CloudflareDefaultDomain', 'CloudflareDomain', 'CloudflareSettings', 'SettingsError',
           'load_config', 'load_settings', 'main']


SETTINGS_SECTION = 'Cloudflare'


def load_config(config_file: str) -> Dict[str, Any]:
    """ read YAML config file
        return dict, empty for an empty file
    """
    logging.debug(f"reading config from {config_file}")
    with open(config_file, 'r') as cfd:
        try:
            config = yaml.load(cfd, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            raise SettingsError(f"{config_file}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise SettingsError(f"{config_file}: top level must be a mapping, got {type(config).__name__}")
    return config


def load_settings(config: Dict[str, Any]) -> CloudflareSettings:
    return CloudflareSettings.from_dict(config.get(SETTINGS_SECTION))


def format_domain(domain: CloudflareDomain) -> str:
    record_type = domain.record_type if domain.record_type else '(unset)'
    return f"{domain.name} {record_type}"


DEFAULT_CONFIG='/etc/cfddns/cfddns.yaml'

@click.command()
@click.option('-c', '--config', 'config_file', default=os.environ.get('CFDDNS_CONFIG',DEFAULT_CONFIG),
              help=f"override CFDDNS_CONFIG env or default {DEFAULT_CONFIG}")
@click.option('-d', '--debug', 'debug', is_flag=True, help='Enable debugging output.')
@click.option('--dump', 'dump', is_flag=True, help='Print the bound Cloudflare settings as YAML and exit.')
def main(config_file, debug, dump):
    """Load and show Cloudflare DDNS plugin settings."""

    logcfg = {'format': '%(asctime)s %(levelname)s %(message)s'}
    if debug:
        logcfg['level'] = logging.DEBUG
    else:
        logcfg['level'] = logging.INFO
    logging.basicConfig(**logcfg)

    try:
        config = load_config(config_file)
        if config.get('logfile', None):
            logcfg['filename'] = config['logfile']
            logging.basicConfig(force=True, **logcfg)
        if config.get('debug', False):
            logcfg['level'] = logging.DEBUG
            logging.basicConfig(force=True, **logcfg)

        settings = load_settings(config)
    except (OSError, SettingsError) as e:
        logging.debug("loading settings failed", exc_info=True)
        raise click.ClickException(str(e))

    if dump:
        click.echo(yaml.safe_dump({SETTINGS_SECTION: settings.to_dict()}, sort_keys=False), nl=False)
        return 0

    if not settings.domains:
        logging.info("no Domains configured, only DefaultDomain is available")
    for domain in settings.domains:
        click.echo(format_domain(domain))
    click.echo(f"{len(settings.domains)} domain(s) configured")

    return 0

if __name__ == '__main__':
    sys.exit(main())
