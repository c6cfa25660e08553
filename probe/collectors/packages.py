"""
Énumération des paquets installés et de leurs fichiers de configuration

Ce module choisit la base de paquets à interroger selon la distribution
(rpm pour la famille Red Hat, dpkg sinon), lance une seule requête au
format tabulé puis convertit la sortie en PackageRecord.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .base import BaseCollector, CommandRunner, run_command
from ..core.models import PackageBackendKind, PackageRecord

DEFAULT_RPM_TOKENS: Tuple[str, ...] = ('rhel', 'centos', 'fedora')

# Une ligne par paquet : nom, version, chemins de configuration séparés par des espaces
QUERY_COMMANDS: Dict[PackageBackendKind, Tuple[str, ...]] = {
    PackageBackendKind.RPM: (
        'rpm', '-qa', '--queryformat', '%{NAME}\t%{VERSION}\t%{CONFIGFILES}\n'
    ),
    PackageBackendKind.DEBIAN: (
        'dpkg-query', '-W', '-f', '${Package}\t${Version}\t${Conffiles}\n'
    ),
}


def select_backend(os_id: str, rpm_tokens: Sequence[str] = DEFAULT_RPM_TOKENS) -> PackageBackendKind:
    """
    Choisit le gestionnaire de paquets à partir du champ ID de la distribution

    La correspondance est une recherche de sous-chaîne insensible à la casse.
    Tout identifiant non reconnu retombe sur le mode Debian.

    Args:
        os_id: Valeur du champ ID de os-release
        rpm_tokens: Jetons désignant une distribution de la famille RPM

    Returns:
        PackageBackendKind: RPM ou DEBIAN
    """
    lowered = (os_id or '').lower()
    for token in rpm_tokens:
        if token and token.lower() in lowered:
            return PackageBackendKind.RPM
    return PackageBackendKind.DEBIAN


def parse_package_output(output: str) -> List[PackageRecord]:
    """
    Parse la sortie tabulée de la requête de paquets

    - lignes vides ignorées
    - lignes de moins de deux champs ignorées
    - troisième champ optionnel découpé sur chaque espace en chemins déclarés
      (un champ vide donne un chemin vide, ignoré à la lecture)

    Args:
        output: Sortie texte de rpm ou dpkg-query

    Returns:
        list: PackageRecord dans l'ordre de la sortie
    """
    packages = []

    for line in output.split('\n'):
        if not line:
            continue

        parts = line.split('\t')
        if len(parts) < 2:
            continue

        config_files: Tuple[str, ...] = ()
        if len(parts) > 2:
            config_files = tuple(parts[2].split(' '))

        packages.append(PackageRecord(name=parts[0], version=parts[1], config_files=config_files))

    return packages


class PackageCollector(BaseCollector):
    """
    Collecteur des paquets installés

    Une seule invocation de la commande de requête par collecte. Tout échec
    de la commande est fatal : aucune liste partielle n'est retournée.
    """

    def __init__(self, config, logger, backend: PackageBackendKind,
                 command_runner: Optional[CommandRunner] = None):
        """
        Args:
            config: Instance de ProbeConfig
            logger: Instance de logging.Logger
            backend: Gestionnaire de paquets à interroger
            command_runner: Capacité d'exécution de commande (subprocess par défaut)
        """
        super().__init__(config, logger)
        self.backend = backend
        self.command_runner = command_runner or run_command

    @property
    def command(self) -> Tuple[str, ...]:
        return QUERY_COMMANDS[self.backend]

    def collect(self) -> List[PackageRecord]:
        """
        Interroge la base de paquets et retourne les paquets installés

        Returns:
            list: PackageRecord dans l'ordre rapporté par le gestionnaire

        Raises:
            PackageQueryError: Commande introuvable ou en échec
        """
        self._start_collection()
        self.logger.debug(f"Requête des paquets via {self.command[0]} ({self.backend.value})")

        raw_output = self.command_runner(self.command)
        packages = parse_package_output(raw_output.decode('utf-8', errors='replace'))

        declared = sum(len(package.config_files) for package in packages)
        self.logger.info(f"{self.command[0]}: {len(packages)} paquets trouvés, "
                         f"{declared} fichiers de configuration déclarés")

        self.last_collection_duration = self._end_collection()
        return packages
