from .markers import MarkerStore, Wait
