"""Process-wide presentation state.

Exposes:
- selected_reptile_id: Optional[str] - the reptile the console program is showing (or None).
- select_default(store): pick the first reptile when nothing valid is selected.

Selection is a presentation concern; the Store never knows which reptile is selected.
"""

from typing import Optional

# Id of the reptile currently shown by the console program.
# None means no reptile exists yet (or none has been chosen).
selected_reptile_id: Optional[str] = None

"""Make sure a valid reptile is selected, if there are any.

    Behavior:
    - If the current selection still exists in the store, it is kept.
    - Otherwise the first reptile (insertion order) becomes selected.
    - With no reptiles at all, the selection is cleared.
"""
def select_default(store):
    global selected_reptile_id  # We rebind the module-level variable below.

    if selected_reptile_id and store.get_reptile(selected_reptile_id):
        return

    reptiles = store.list_reptiles()
    selected_reptile_id = reptiles[0].id if reptiles else None
