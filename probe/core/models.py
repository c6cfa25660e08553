"""
Modèle de données du snapshot d'inventaire

Toutes les valeurs sont immuables une fois construites : le snapshot est
produit en une seule passe puis sérialisé, il n'est jamais mis à jour.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Tuple


class PackageBackendKind(Enum):
    """Stratégies de requête de la base de paquets supportées"""
    RPM = "rpm"
    DEBIAN = "debian"


class DistributionIdentity(Mapping[str, str]):
    """
    Identité de la distribution issue de /etc/os-release

    Mapping en lecture seule clé -> valeur (ID, ID_LIKE, VERSION_ID...).
    """

    def __init__(self, fields: Mapping[str, str] = None):
        self._fields = dict(fields or {})

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"DistributionIdentity({self._fields!r})"

    @property
    def os_id(self) -> str:
        """Valeur du champ ID, chaîne vide si absent"""
        return self._fields.get('ID', '')

    def as_dict(self) -> Dict[str, str]:
        return dict(self._fields)


@dataclass(frozen=True)
class PackageRecord:
    """
    Paquet installé tel que rapporté par le gestionnaire de paquets

    Attributes:
        name: Nom du paquet
        version: Version du paquet
        config_files: Chemins de configuration déclarés, dans l'ordre du gestionnaire.
            Ils peuvent ne plus exister et se répéter d'un paquet à l'autre.
    """

    name: str
    version: str
    config_files: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'version': self.version,
            'config_files': list(self.config_files)
        }


@dataclass(frozen=True)
class ConfigSnapshot:
    """
    Contenu d'un fichier de configuration lu avec succès

    Attributes:
        path: Chemin déclaré par le paquet
        content: Contenu décodé en UTF-8
        modified: Date de dernière modification (ISO 8601, heure locale)
    """

    path: str
    content: str
    modified: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'path': self.path,
            'content': self.content,
            'modified': self.modified
        }


@dataclass(frozen=True)
class SystemSnapshot:
    """
    Résultat complet d'une exécution de la sonde

    Les clés de configurations sont un sous-ensemble des chemins déclarés
    par les paquets. Pour un chemin déclaré plusieurs fois, la dernière
    lecture dans l'ordre d'énumération est conservée.
    """

    os_release: DistributionIdentity
    packages: Tuple[PackageRecord, ...] = ()
    configurations: Mapping[str, ConfigSnapshot] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'packages', tuple(self.packages))
        object.__setattr__(self, 'configurations', MappingProxyType(dict(self.configurations)))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convertit le snapshot en structure sérialisable

        Returns:
            dict: os_release, packages et configurations
        """
        return {
            'os_release': self.os_release.as_dict(),
            'packages': [package.to_dict() for package in self.packages],
            'configurations': {
                path: config.to_dict() for path, config in self.configurations.items()
            }
        }
