"""Card duel rules and room lifecycle.

``cards`` and ``deck`` model the 52-card pack, ``rules`` scores a clash,
``session`` runs one room's turn engine, ``projector`` builds each player's
hidden-information view, ``registry`` owns open rooms and the public lobby
list, and ``scheduler`` delays resolution after a reveal. Nothing here
touches Flask or Socket.IO.
"""
