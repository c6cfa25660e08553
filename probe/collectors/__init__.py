"""
Package des collecteurs de données pour la sonde d'inventaire

Ce package contient les collecteurs spécialisés :
- Collecteur de base (classe abstraite)
- Identification de la distribution
- Énumération des paquets (rpm, dpkg)
- Lecture des fichiers de configuration
"""
