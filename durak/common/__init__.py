"""
Card primitives shared by the Durak engine: cards, decks, hands and IO.
"""
