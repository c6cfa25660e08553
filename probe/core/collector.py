"""
Module collecteur principal pour la sonde d'inventaire

Ce module orchestre la collecte dans un ordre strict :
- Identification de la distribution
- Choix du gestionnaire de paquets
- Énumération des paquets
- Lecture des fichiers de configuration déclarés
- Assemblage du snapshot final
"""

import time
from typing import Any, Dict, Optional

from ..collectors.base import CommandRunner, TextReader
from ..collectors.configuration import ConfigurationCollector
from ..collectors.distribution import DistributionCollector
from ..collectors.packages import DEFAULT_RPM_TOKENS, PackageCollector, select_backend
from .models import SystemSnapshot


class SnapshotCollector:
    """
    Collecteur principal qui produit le snapshot d'inventaire

    Les capacités externes (lecture du descripteur, exécution de la requête
    de paquets) sont injectables pour permettre de tester la logique sans
    toucher au système réel.
    """

    def __init__(self, config, logger,
                 descriptor_reader: Optional[TextReader] = None,
                 command_runner: Optional[CommandRunner] = None,
                 root_dir: Optional[str] = None):
        """
        Initialise le collecteur principal

        Args:
            config: Instance de ProbeConfig (None pour les valeurs par défaut)
            logger: Instance de ProbeLogger
            descriptor_reader: Lecture du descripteur os-release
            command_runner: Exécution de la commande de requête des paquets
            root_dir: Racine de lecture des fichiers de configuration
        """
        self.config = config
        self.logger = logger.get_logger()
        self.descriptor_reader = descriptor_reader
        self.command_runner = command_runner
        self.root_dir = root_dir

        if config is not None:
            self.rpm_tokens = tuple(config.get_package_config()['rpm_distributions'])
        else:
            self.rpm_tokens = DEFAULT_RPM_TOKENS

        self._last_stats: Dict[str, Any] = {}

    def collect(self) -> SystemSnapshot:
        """
        Lance une collecte complète

        Returns:
            SystemSnapshot: Snapshot immuable de l'hôte

        Raises:
            DescriptorReadError: Descripteur de distribution illisible
            PackageQueryError: Requête des paquets en échec
        """
        start_time = time.time()
        self.logger.info("=== Début de collecte d'inventaire ===")

        # Phase 1: Distribution
        distribution_collector = DistributionCollector(self.config, self.logger, self.descriptor_reader)
        identity = distribution_collector.collect()

        # Phase 2: Gestionnaire de paquets
        backend = select_backend(identity.os_id, self.rpm_tokens)
        self.logger.info(f"Gestionnaire de paquets sélectionné: {backend.value}")

        # Phase 3: Paquets
        package_collector = PackageCollector(self.config, self.logger, backend, self.command_runner)
        packages = package_collector.collect()

        # Phase 4: Fichiers de configuration
        configuration_collector = ConfigurationCollector(self.config, self.logger, self.root_dir)
        configurations = configuration_collector.collect(packages)

        snapshot = SystemSnapshot(
            os_release=identity,
            packages=packages,
            configurations=configurations
        )

        collection_duration = time.time() - start_time
        self._last_stats = {
            'backend': backend.value,
            'packages_count': len(snapshot.packages),
            'configurations_count': len(snapshot.configurations),
            'skipped_files': configuration_collector.get_collection_stats()['errors_count'],
            'collection_duration': round(collection_duration, 2)
        }

        self.logger.info(f"Collecte terminée en {collection_duration:.2f} secondes")
        self.logger.info(f"Collecté: {len(snapshot.packages)} paquets, "
                         f"{len(snapshot.configurations)} fichiers de configuration")

        return snapshot

    def get_collection_stats(self) -> Dict[str, Any]:
        """
        Retourne les statistiques de la dernière collecte

        Returns:
            dict: Statistiques de collecte
        """
        if not self._last_stats:
            return {'status': 'no_collection_yet'}
        return dict(self._last_stats, status='success')
