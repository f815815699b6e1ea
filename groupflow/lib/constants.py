"""Constantes de roteamento usadas pelos classificadores."""

# Nome do bucket que recebe itens cuja chave derivada é vazia/ausente
UNKNOWN_BUCKET = "Unknown"
