"""
Classe de base pour tous les collecteurs de la sonde d'inventaire

Ce module définit l'interface commune que tous les collecteurs
doivent implémenter, ainsi que les capacités externes partagées :
exécution d'une commande système et lecture d'un fichier texte.
"""

import subprocess
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Sequence

from ..core.errors import PackageQueryError


# Capacité d'exécution : reçoit le vecteur d'arguments, retourne stdout brut
CommandRunner = Callable[[Sequence[str]], bytes]

# Capacité de lecture : reçoit un chemin, retourne le contenu texte
TextReader = Callable[[str], str]


def run_command(command: Sequence[str]) -> bytes:
    """
    Exécute une commande système et retourne sa sortie standard brute

    Aucun timeout ni nouvelle tentative : la commande est lancée une fois.

    Args:
        command: Vecteur d'arguments (pas de shell)

    Returns:
        bytes: Sortie standard de la commande

    Raises:
        PackageQueryError: Commande introuvable ou code de retour non nul
    """
    try:
        result = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False
        )
    except OSError as e:
        raise PackageQueryError(command, str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.decode('utf-8', errors='replace').strip()
        raise PackageQueryError(command, stderr or "commande échouée", result.returncode)

    return result.stdout


def read_text_file(path: str) -> str:
    """Lit un fichier texte en UTF-8, octets invalides remplacés"""
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


class BaseCollector(ABC):
    """
    Classe de base abstraite pour tous les collecteurs

    Cette classe définit l'interface commune et fournit le suivi
    de durée et d'erreurs de chaque collecte.
    """

    def __init__(self, config, logger):
        """
        Initialise le collecteur de base

        Args:
            config: Instance de ProbeConfig
            logger: Instance de logging.Logger
        """
        self.config = config
        self.logger = logger

        # Métadonnées du collecteur
        self.collector_name = self.__class__.__name__
        self.collection_start_time = None
        self.collection_errors: List[str] = []
        self.last_collection_duration = 0.0

    @abstractmethod
    def collect(self, *args, **kwargs) -> Any:
        """
        Méthode principale de collecte - doit être implémentée par chaque collecteur

        Returns:
            Données collectées
        """
        pass

    def _start_collection(self):
        """
        Démarre une session de collecte

        Initialise les métriques et logs pour le suivi de performance.
        """
        self.collection_start_time = time.time()
        self.collection_errors = []
        self.logger.debug(f"Début collecte {self.collector_name}")

    def _end_collection(self) -> float:
        """
        Termine une session de collecte

        Returns:
            float: Durée de collecte en secondes
        """
        if self.collection_start_time:
            duration = time.time() - self.collection_start_time
            self.logger.debug(f"Collecte {self.collector_name} terminée en {duration:.2f}s")

            if self.collection_errors:
                self.logger.warning(f"Collecte {self.collector_name} avec {len(self.collection_errors)} erreur(s)")

            return duration
        return 0.0

    def _record_error(self, message: str):
        """Enregistre une erreur non fatale et l'émet en warning"""
        self.collection_errors.append(message)
        self.logger.warning(message)

    def get_collection_stats(self) -> Dict[str, Any]:
        """
        Retourne les statistiques de la dernière collecte

        Returns:
            dict: Statistiques du collecteur
        """
        return {
            'collector_name': self.collector_name,
            'collection_duration': self.last_collection_duration,
            'errors_count': len(self.collection_errors),
            'errors': self.collection_errors.copy()
        }
