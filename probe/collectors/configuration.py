"""
Collecteur des fichiers de configuration déclarés par les paquets

Pour chaque chemin déclaré, lit le contenu et la date de modification.
Un fichier absent, illisible ou qui n'est pas un fichier régulier est
signalé en warning puis ignoré : c'est le seul échec toléré d'une exécution.
"""

import os
import stat
from datetime import datetime
from typing import Dict, Iterable

from .base import BaseCollector
from ..core.models import ConfigSnapshot, PackageRecord


class ConfigurationCollector(BaseCollector):
    """
    Collecteur du contenu des fichiers de configuration

    Les chemins sont lus sous un répertoire racine (``/`` par défaut), ce qui
    permet d'inventorier une image système montée ailleurs. Les clés du
    résultat restent les chemins déclarés par les paquets.
    """

    def __init__(self, config, logger, root_dir: str = None):
        """
        Args:
            config: Instance de ProbeConfig
            logger: Instance de logging.Logger
            root_dir: Racine de lecture, prioritaire sur la configuration
        """
        super().__init__(config, logger)

        if root_dir is None:
            root_dir = config.get_probe_config()['root_dir'] if config is not None else '/'
        self.root_dir = root_dir

    def collect(self, packages: Iterable[PackageRecord]) -> Dict[str, ConfigSnapshot]:
        """
        Lit tous les fichiers de configuration déclarés

        Parcourt les paquets puis leurs chemins dans l'ordre d'énumération.
        Un chemin déclaré par plusieurs paquets est écrasé par la dernière lecture.

        Args:
            packages: Paquets énumérés

        Returns:
            dict: Chemin déclaré -> ConfigSnapshot, uniquement pour les lectures réussies
        """
        self._start_collection()

        configurations = {}
        attempted = 0

        for package in packages:
            for path in package.config_files:
                attempted += 1
                try:
                    configurations[path] = self.read_config_file(path)
                except (OSError, ValueError, OverflowError) as e:
                    self._record_error(f"Impossible de lire la configuration {path} "
                                       f"(paquet {package.name}): {e}")

        self.logger.info(f"Fichiers de configuration lus: {len(configurations)}/{attempted}")
        self.last_collection_duration = self._end_collection()
        return configurations

    def read_config_file(self, path: str) -> ConfigSnapshot:
        """
        Lit un fichier de configuration et sa date de modification

        Args:
            path: Chemin déclaré par le paquet

        Returns:
            ConfigSnapshot: Contenu et date de modification

        Raises:
            OSError: Fichier absent, illisible ou non régulier
        """
        full_path = self._resolve(path)

        file_stat = os.stat(full_path)
        if not stat.S_ISREG(file_stat.st_mode):
            raise OSError(f"pas un fichier régulier: {full_path}")

        with open(full_path, 'rb') as f:
            content = f.read()

        return ConfigSnapshot(
            path=path,
            content=content.decode('utf-8', errors='replace'),
            modified=self._format_mtime(file_stat.st_mtime)
        )

    def _resolve(self, path: str) -> str:
        """Place le chemin déclaré sous le répertoire racine"""
        return os.path.join(self.root_dir, path.lstrip('/'))

    @staticmethod
    def _format_mtime(mtime: float) -> str:
        return datetime.fromtimestamp(mtime).astimezone().isoformat()
