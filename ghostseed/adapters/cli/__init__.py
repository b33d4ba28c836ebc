"""
Interface ligne de commande (Typer + Rich).

- commands/ : commandes run et name (parse, check, propose)
- helpers : console partagee et utilitaires de container
"""
