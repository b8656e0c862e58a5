"""
Exercise Tracker — Services Layer
===================================

Service Inventory:
    - filters:         parsing of ids, date bounds, limits and form fields
    - UserService:     create / list / look up users
    - ExerciseService: add exercises, build filtered exercise logs

Services receive the request's AsyncSession per call and hold no state,
so they are unit-testable without HTTP.
"""
