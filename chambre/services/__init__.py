"""
Chambre API: Services Layer
=============================

What:  Validation and store access sitting between routes (HTTP) and models.

Service Inventory:
    - validation:      validate_room_payload / validate_entity_payload → Valid | Invalid
    - RoomService:     list, get, create, update, delete rooms
    - EntityService:   list and create entities

Services receive the request's AsyncSession on every call and keep no state.
"""
