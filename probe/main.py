"""
Point d'entrée principal de la Watchman Host Probe

Ce module exécute une collecte unique et émet le snapshot JSON :
- sur la sortie standard par défaut
- dans un fichier si --output est fourni

Les diagnostics passent par le logger (stderr et fichier de log).
Code de sortie 1 sur toute erreur fatale.
"""

import sys
import argparse

from probe.core.config import ProbeConfig, create_default_config
from probe.core.errors import ProbeError
from probe.core.logger import ProbeLogger
from probe.core.collector import SnapshotCollector
from probe.core.output import render_snapshot, write_snapshot


def emit_document(document: str, stream=None):
    """
    Écrit le document JSON en UTF-8 sur la sortie standard

    Les octets sont écrits sur le buffer binaire, quelle que soit la locale.

    Args:
        document: Snapshot sérialisé
        stream: Flux texte de sortie (sys.stdout par défaut)
    """
    stream = stream or sys.stdout
    stream.flush()
    stream.buffer.write(document.encode('utf-8') + b'\n')
    stream.buffer.flush()


class WatchmanHostProbe:
    """
    Sonde d'inventaire principale

    Cette classe relie configuration, logging, collecte et sortie
    pour une exécution unique.
    """

    def __init__(self, config_path=None, root_dir=None, os_release_path=None, log_level=None):
        """
        Initialise la sonde

        Args:
            config_path: Chemin vers le fichier de configuration
            root_dir: Racine de lecture des fichiers de configuration
            os_release_path: Descripteur de distribution alternatif
            log_level: Niveau de log forçant celui de la configuration
        """
        self.config = ProbeConfig(config_path)

        # Les options de ligne de commande priment sur le fichier
        if root_dir:
            self.config.set('probe', 'root_dir', root_dir)
        if os_release_path:
            self.config.set('probe', 'os_release_path', os_release_path)
        if log_level:
            self.config.set('probe', 'log_level', log_level)

        self.logger = ProbeLogger(self.config, log_level)
        self.app_logger = self.logger.get_logger()

        self.collector = SnapshotCollector(self.config, self.logger)

    def collect_only(self):
        """
        Effectue une collecte et retourne le document JSON

        Returns:
            str: Snapshot sérialisé

        Raises:
            ProbeError: Erreur fatale de collecte ou de sérialisation
        """
        snapshot = self.collector.collect()
        indent = self.config.get_output_config()['indent']
        return render_snapshot(snapshot, indent=indent)

    def run(self, output_file=None) -> int:
        """
        Exécute la sonde et émet le snapshot

        Args:
            output_file: Fichier de sortie (stdout si None)

        Returns:
            int: Code de sortie
        """
        output_file = output_file or self.config.get_output_config()['output_file']

        try:
            document = self.collect_only()

            if output_file:
                write_snapshot(document, output_file)
                self.app_logger.info(f"Snapshot sauvegardé dans: {output_file}")
            else:
                emit_document(document)

            return 0

        except ProbeError as e:
            self.app_logger.error(str(e))
            return 1
        except OSError as e:
            self.app_logger.error(f"Erreur d'écriture du snapshot: {e}")
            return 1


def main(argv=None) -> int:
    """
    Point d'entrée principal avec gestion des arguments de ligne de commande
    """
    parser = argparse.ArgumentParser(
        description='Sonde d\'inventaire - Paquets installés et fichiers de configuration'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Chemin vers le fichier de configuration'
    )

    parser.add_argument(
        '--root', '-r',
        type=str,
        help='Répertoire racine sous lequel lire les fichiers de configuration'
    )

    parser.add_argument(
        '--os-release',
        type=str,
        help='Descripteur de distribution à utiliser à la place de /etc/os-release'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Fichier de sortie pour le snapshot JSON (stdout par défaut)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        help='Niveau de log'
    )

    parser.add_argument(
        '--create-config',
        action='store_true',
        help='Crée un fichier de configuration par défaut'
    )

    parser.add_argument(
        '--validate-config',
        action='store_true',
        help='Valide la configuration actuelle'
    )

    args = parser.parse_args(argv)

    # Créer une configuration par défaut
    if args.create_config:
        if not args.config:
            print("❌ --config est requis avec --create-config", file=sys.stderr)
            return 1
        try:
            create_default_config(args.config)
            print(f"✅ Configuration par défaut créée: {args.config}", file=sys.stderr)
            return 0
        except OSError as e:
            print(f"❌ Erreur création configuration: {e}", file=sys.stderr)
            return 1

    probe = WatchmanHostProbe(args.config, args.root, args.os_release, args.log_level)

    # Valider la configuration
    if args.validate_config:
        errors = probe.config.validate()
        for error in errors:
            print(f"Erreur de configuration: {error}", file=sys.stderr)
        if errors:
            print("❌ Configuration invalide", file=sys.stderr)
            return 1
        print("✅ Configuration valide", file=sys.stderr)
        return 0

    try:
        return probe.run(args.output)
    except KeyboardInterrupt:
        print("\n🛑 Arrêt demandé par l'utilisateur", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
