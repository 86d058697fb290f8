"""Services Layer — persistence-backed operations over users and dogs.

Invariants:
    - Services ask core/ for decisions and apply them against the database
    - Every state change is a single statement (insert, conditional update, conditional delete)

Design Decisions:
    - One service per aggregate: UserDirectory owns users, DogRegistry owns dogs
"""
