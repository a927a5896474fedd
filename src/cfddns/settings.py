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

""" Settings for the Cloudflare DDNS update plugin.

    The appsettings section looks like:

    Cloudflare:
      DefaultDomain:
        ApiToken: ...
        ZoneId: ...
      Domains:
        - Name: home.example.com
        - Name: vpn.example.com
          RecordType: AAAA

    DefaultDomain holds the values meant to be used when a Domains entry does
    not carry its own. Applying that fallback is up to the consumer of these
    settings, nothing here merges the two.
"""

import logging

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class SettingsError(ValueError):
    """ malformed Cloudflare settings section """


def _format_loc(where: str, loc) -> str:
    path = where
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}"
    return path


def _validate(cls, data: Any, where: str):
    """ model_validate, ValidationError -> SettingsError with config key paths """
    try:
        return cls.model_validate(data)
    except ValidationError as e:
        problems = '; '.join(f"{_format_loc(where, err['loc'])}: {err['msg']}" for err in e.errors())
        raise SettingsError(problems) from e


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    @model_validator(mode='before')
    @classmethod
    def drop_unknown_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = set()
        for name, f in cls.model_fields.items():
            known.add(name)
            if f.alias:
                known.add(f.alias)
        for key in data:
            if key not in known:
                logging.warning(f"{cls.__name__}: ignoring unknown key {key}")
        return {k: v for k, v in data.items() if k in known}


class CloudflareDefaultDomain(_Section):
    """ values used when a Domains entry does not set them """

    api_token: str = Field(default='', alias='ApiToken')
    zone_id: str = Field(default='', alias='ZoneId')
    record_type: str = Field(default='A', alias='RecordType')
    ttl: int = Field(default=1, alias='Ttl') # 1 = automatic
    proxied: bool = Field(default=False, alias='Proxied')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CloudflareDefaultDomain':
        return _validate(cls, data, 'DefaultDomain')

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class CloudflareDomain(_Section):
    """ one DNS record to keep updated, None = not set in this entry """

    name: str = Field(default='', alias='Name')
    api_token: Optional[str] = Field(default=None, alias='ApiToken')
    zone_id: Optional[str] = Field(default=None, alias='ZoneId')
    record_type: Optional[str] = Field(default=None, alias='RecordType')
    ttl: Optional[int] = Field(default=None, alias='Ttl')
    proxied: Optional[bool] = Field(default=None, alias='Proxied')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CloudflareDomain':
        return _validate(cls, data, 'Domains')

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CloudflareSettings(_Section):
    """ the Cloudflare configuration section: one DefaultDomain and any number of Domains

        A fresh instance always has a default record and an empty domain list.
        Both attributes may be replaced wholesale, nothing is checked on assignment.
    """

    default_domain: CloudflareDefaultDomain = Field(default_factory=CloudflareDefaultDomain, alias='DefaultDomain')
    domains: List[CloudflareDomain] = Field(default_factory=list, alias='Domains')

    @model_validator(mode='before')
    @classmethod
    def null_parts_keep_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_dict(cls, section: Optional[Dict[str, Any]]) -> 'CloudflareSettings':
        """ bind a configuration section, missing or null parts keep their defaults
            raise SettingsError when the section does not have the expected shape
        """
        if section is None:
            logging.debug("no Cloudflare section, using defaults")
            return cls()
        settings = _validate(cls, section, 'Cloudflare')
        logging.debug(f"bound {len(settings.domains)} domain(s)")
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
