"""
Module de logging pour la sonde d'inventaire

Ce module fournit un système de logging centralisé avec :
- Rotation automatique des logs
- Niveau configurable
- Sortie console sur stderr (stdout est réservé au snapshot JSON)
"""

import os
import sys
import logging
import logging.handlers


LOGGER_NAME = 'WatchmanHostProbe'


class ProbeLogger:
    """
    Gestionnaire de logging pour la sonde d'inventaire

    Cette classe configure le logger de l'application une seule fois,
    avec rotation du fichier de log et un handler console sur stderr.
    """

    def __init__(self, config=None, level: str = None):
        """
        Initialise le système de logging

        Args:
            config: Instance de ProbeConfig pour récupérer les paramètres de log
            level: Niveau de log forçant celui de la configuration
        """
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)

        # Éviter la duplication si déjà configuré
        if not self.logger.handlers:
            self._setup_logging(level)
        elif level:
            self._apply_level(level)

    def _setup_logging(self, level_override: str = None):
        """
        Configure le système de logging avec les handlers appropriés

        Configure :
        - Le niveau de log basé sur la configuration
        - La rotation des fichiers de log
        - La sortie console sur stderr
        """
        if self.config:
            log_level_str = self.config.get('probe', 'log_level', 'INFO')
            log_file = self.config.get('logging', 'log_file')
            max_size = self.config.getint('logging', 'max_log_size', 10485760)  # 10MB
            backup_count = self.config.getint('logging', 'backup_count', 5)
        else:
            log_level_str = 'INFO'
            log_file = None
            max_size = 10485760
            backup_count = 5

        log_level = self._resolve_level(level_override or log_level_str)
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        if log_file:
            formatter = logging.Formatter(
                fmt='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

            try:
                # Créer le dossier de log si nécessaire
                log_dir = os.path.dirname(log_file)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)

                file_handler = logging.handlers.RotatingFileHandler(
                    filename=log_file,
                    maxBytes=max_size,
                    backupCount=backup_count,
                    encoding='utf-8'
                )
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

            except OSError as e:
                print(f"Erreur lors de la configuration du logging fichier: {e}", file=sys.stderr)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(fmt='%(levelname)s - %(message)s'))
        self.logger.addHandler(console_handler)

        self.logger.debug("Système de logging initialisé")
        if log_file:
            self.logger.debug(f"Fichier de log: {log_file}")

    def _apply_level(self, level: str):
        self.logger.setLevel(self._resolve_level(level))

    @staticmethod
    def _resolve_level(level: str) -> int:
        """Convertit un niveau texte en constante logging, INFO par défaut"""
        value = getattr(logging, str(level).upper(), None)
        return value if isinstance(value, int) else logging.INFO

    def get_logger(self) -> logging.Logger:
        """
        Retourne l'instance du logger

        Returns:
            logging.Logger: Instance du logger configuré
        """
        return self.logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Fonction utilitaire pour récupérer un logger nommé

    Args:
        name: Nom du logger

    Returns:
        logging.Logger: Instance du logger
    """
    return logging.getLogger(name)
