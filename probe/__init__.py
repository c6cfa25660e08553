"""
Watchman Host Probe - Inventaire des paquets et de leurs fichiers de configuration

Ce module principal fournit une sonde qui identifie la distribution Linux,
énumère les paquets installés via la base native (rpm ou dpkg) et collecte
le contenu des fichiers de configuration déclarés par ces paquets.

Author: Watchman Agent Client Team
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Watchman Agent Client Team"

# Imports principaux pour faciliter l'utilisation
from .core.collector import SnapshotCollector
from .core.config import ProbeConfig
from .core.logger import ProbeLogger

__all__ = ['SnapshotCollector', 'ProbeConfig', 'ProbeLogger']
