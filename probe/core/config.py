"""
Module de configuration pour la sonde d'inventaire

Ce module gère la configuration de la sonde, incluant :
- Lecture des fichiers de configuration
- Validation des paramètres
- Valeurs par défaut
"""

import os
import sys
import configparser
from typing import Dict, Any, List, Optional


DEFAULT_CONFIG_PATH = "/etc/watchman-host-probe/config.ini"
DEFAULT_OS_RELEASE_PATH = "/etc/os-release"
DEFAULT_RPM_DISTRIBUTIONS = "rhel,centos,fedora"
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ProbeConfig:
    """
    Gestionnaire de configuration pour la sonde d'inventaire

    Cette classe centralise la configuration de la sonde : emplacement du
    descripteur de distribution, racine de lecture des fichiers, choix du
    gestionnaire de paquets, format de sortie et journalisation.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialise la configuration de la sonde

        Args:
            config_file: Chemin vers le fichier de configuration (optionnel)
        """
        self.config = configparser.ConfigParser()
        self.config_file = config_file or DEFAULT_CONFIG_PATH

        # Définir les valeurs par défaut
        self._set_defaults()

        # Charger la configuration depuis le fichier
        self._load_config()

    def _set_defaults(self):
        """
        Définit les valeurs de configuration par défaut

        Ces valeurs sont utilisées si aucun fichier de configuration n'est trouvé
        ou si certaines sections/clés sont manquantes.
        """
        # Configuration sonde
        self.config.add_section('probe')
        self.config.set('probe', 'log_level', 'INFO')
        self.config.set('probe', 'os_release_path', DEFAULT_OS_RELEASE_PATH)
        self.config.set('probe', 'root_dir', '/')

        # Sélection du gestionnaire de paquets
        self.config.add_section('packages')
        self.config.set('packages', 'rpm_distributions', DEFAULT_RPM_DISTRIBUTIONS)

        # Sortie JSON
        self.config.add_section('output')
        self.config.set('output', 'indent', '2')
        self.config.set('output', 'output_file', '')

        # Configuration logging
        self.config.add_section('logging')
        self.config.set('logging', 'log_file', '/tmp/watchman-host-probe.log')
        self.config.set('logging', 'max_log_size', '10485760')  # 10MB
        self.config.set('logging', 'backup_count', '5')

    def _load_config(self):
        """
        Charge la configuration depuis le fichier

        Si le fichier n'existe pas, utilise les valeurs par défaut.
        En cas d'erreur de lecture, signale l'erreur et continue avec les défauts.
        Les messages vont sur stderr : stdout est réservé au snapshot JSON.
        """
        try:
            if os.path.exists(self.config_file):
                self.config.read(self.config_file, encoding='utf-8')
            else:
                self._report(f"Fichier de configuration non trouvé: {self.config_file}")
                self._report("Utilisation des valeurs par défaut")

        except (configparser.Error, OSError) as e:
            self._report(f"Erreur lors du chargement de la configuration: {e}")
            self._report("Utilisation des valeurs par défaut")

    @staticmethod
    def _report(message: str):
        print(message, file=sys.stderr)

    def get(self, section: str, option: str, fallback: Any = None) -> str:
        """
        Récupère une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            fallback: Valeur par défaut si non trouvée

        Returns:
            str: Valeur de configuration
        """
        return self.config.get(section, option, fallback=fallback)

    def getint(self, section: str, option: str, fallback: int = 0) -> int:
        """
        Récupère une valeur entière de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            fallback: Valeur par défaut si non trouvée ou invalide

        Returns:
            int: Valeur entière
        """
        try:
            return self.config.getint(section, option, fallback=fallback)
        except ValueError:
            return fallback

    def set(self, section: str, option: str, value: str):
        """
        Définit une valeur de configuration

        Args:
            section: Nom de la section
            option: Nom de l'option
            value: Nouvelle valeur
        """
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, option, str(value))

    def save(self):
        """
        Sauvegarde la configuration dans le fichier

        Crée les dossiers parents si nécessaire.
        """
        config_dir = os.path.dirname(self.config_file)
        if config_dir and not os.path.exists(config_dir):
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            self.config.write(f)

    def get_probe_config(self) -> Dict[str, Any]:
        """
        Récupère la configuration générale de la sonde

        Returns:
            dict: log_level, os_release_path, root_dir
        """
        return {
            'log_level': self.get('probe', 'log_level', 'INFO'),
            'os_release_path': self.get('probe', 'os_release_path', DEFAULT_OS_RELEASE_PATH),
            'root_dir': self.get('probe', 'root_dir', '/') or '/'
        }

    def get_package_config(self) -> Dict[str, Any]:
        """
        Récupère la configuration de sélection du gestionnaire de paquets

        Returns:
            dict: rpm_distributions sous forme de liste de jetons
        """
        return {
            'rpm_distributions': self._split_list(
                self.get('packages', 'rpm_distributions', DEFAULT_RPM_DISTRIBUTIONS)
            )
        }

    def get_output_config(self) -> Dict[str, Any]:
        """Récupère la configuration de sortie"""
        return {
            'indent': self.getint('output', 'indent', 2),
            'output_file': self.get('output', 'output_file', '') or None
        }

    @staticmethod
    def _split_list(value: str) -> List[str]:
        return [token.strip() for token in (value or '').split(',') if token.strip()]

    def validate(self) -> List[str]:
        """
        Valide la configuration courante

        Returns:
            list: Erreurs de configuration (vide si la configuration est valide)
        """
        errors = []

        # Valider le niveau de log
        log_level = self.get('probe', 'log_level', '')
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append("Niveau de log invalide")

        # Valider la racine de lecture
        root_dir = self.get_probe_config()['root_dir']
        if not os.path.isdir(root_dir):
            errors.append(f"Répertoire racine invalide: {root_dir}")

        # Valider l'indentation
        try:
            if self.config.getint('output', 'indent') < 0:
                errors.append("Indentation invalide (doit être positive)")
        except ValueError:
            errors.append("Indentation invalide (doit être un entier)")

        # Au moins une distribution RPM
        if not self.get_package_config()['rpm_distributions']:
            errors.append("Aucune distribution RPM configurée")

        return errors


# Fonction utilitaire pour créer une configuration par défaut
def create_default_config(config_path: str) -> ProbeConfig:
    """
    Crée un fichier de configuration par défaut

    Args:
        config_path: Chemin où créer le fichier de configuration

    Returns:
        ProbeConfig: Instance de configuration créée
    """
    config = ProbeConfig(config_path)
    config.save()
    return config
