from colorama import Fore
from switchlang import switch

import reptile_log.infrastructure.state as state
from reptile_log.data.entries import EntryType
from reptile_log.infrastructure.errors import PersistenceWriteError, ValidationError
from reptile_log.services.stats import compute_stats


"""
Interactive console workflow for keeping a reptile log.

This module provides the command loop and actions:
- Registering reptiles and choosing which one is shown.
- Logging feeding / toilet / bath / vet entries for the selected reptile.
- Listing entries (newest first) and viewing per-type statistics.

Conventions:
- Uses switchlang.switch for a case-like control flow pattern.
- Uses infrastructure.state.selected_reptile_id for the reptile being shown.
- Delegates validation, persistence and querying to the Store.
- Uses success_msg / error_msg helpers for colored user feedback.

Notes:
- Display labels for entry types live here only; the core only knows the tags.
- Times are stored in UTC and shown in local time.
"""

TYPE_LABELS = {
    EntryType.FEEDING: 'Feeding',
    EntryType.TOILET: 'Toilet',
    EntryType.BATH: 'Bath',
    EntryType.VET: 'Vet visit',
}

# Single-letter answers accepted by the "what happened?" prompt.
TYPE_SHORTCUTS = {
    'f': EntryType.FEEDING,
    't': EntryType.TOILET,
    'b': EntryType.BATH,
    'v': EntryType.VET,
}

"""
Entry point for the command loop.

Prints the available commands, then processes user input until the user exits
(exit_app raises KeyboardInterrupt, handled by program.main).
"""
def run(store):
    show_commands()

    while True:
        action = get_action(store)

        with switch(action) as s:
            s.case('r', lambda: add_reptile(store))
            s.case('s', lambda: select_reptile(store))
            s.case('a', lambda: add_entry(store))
            s.case('l', lambda: list_entries(store))
            s.case('v', lambda: view_stats(store))
            s.case(['x', 'bye', 'exit', 'exit()'], exit_app)
            s.case('?', show_commands)
            s.case('', lambda: None)  # No-op for empty input.
            s.default(unknown_command)

        if action:
            print()


def show_commands():
    print('What action would you like to take:')
    print('Add a [r]eptile')
    print('[S]elect a reptile')
    print('[A]dd an entry')
    print('[L]ist entries')
    print('[V]iew stats')
    print('e[X]it app')
    print('[?] Help (this info)')
    print()


"""
Ask for a name and register a new reptile.

The first reptile ever added becomes the selected one.
"""
def add_reptile(store):
    print(' ****************** ADD REPTILE **************** ')

    name = input('What is your reptile called? ')
    try:
        reptile = store.add_reptile(name)
    except ValidationError as ex:
        error_msg(str(ex))
        return
    except PersistenceWriteError as ex:
        error_msg(f'Could not save: {ex}')
        return

    if store.reptile_count == 1:
        state.selected_reptile_id = reptile.id

    success_msg(f'Added {reptile.name}.')


def select_reptile(store):
    print(' ****************** SELECT REPTILE **************** ')

    reptiles = store.list_reptiles()
    if not reptiles:
        error_msg('Add a reptile first.')
        return

    for idx, r in enumerate(reptiles):
        marker = '*' if r.id == state.selected_reptile_id else ' '
        print(f' {marker}{idx + 1}. {r.name}')

    number = input('Enter reptile number: ').strip()
    if not number:
        error_msg('Cancelled')
        return

    # Convert the 1-based number shown above to a list index.
    if not number.isdecimal() or not 1 <= int(number) <= len(reptiles):
        error_msg(f'There is no reptile number {number}.')
        return

    selected = reptiles[int(number) - 1]
    state.selected_reptile_id = selected.id
    success_msg(f'Selected {selected.name}.')


"""
Log an entry for the selected reptile.

Prompts for the entry type (defaults to feeding on empty input) and optional notes.
"""
def add_entry(store):
    print(' ****************** ADD ENTRY **************** ')

    reptile = selected_reptile(store)
    if not reptile:
        return

    answer = input('What happened? [f]eeding, [t]oilet, [b]ath, [v]et: ').strip().lower()
    entry_type = TYPE_SHORTCUTS.get(answer[:1] if answer else 'f')
    if entry_type is None:
        error_msg(f"Sorry, '{answer}' is not an entry type.")
        return

    notes = input('Notes (optional): ')

    try:
        entry = store.add_entry(reptile.id, entry_type, notes)
    except ValidationError as ex:
        error_msg(str(ex))
        return
    except PersistenceWriteError as ex:
        error_msg(f'Could not save: {ex}')
        return

    success_msg(f'{TYPE_LABELS[entry.type]} logged for {reptile.name} at {format_date(entry.timestamp)}.')


def list_entries(store):
    print(' ******************     Entries     **************** ')

    reptile = selected_reptile(store)
    if not reptile:
        return

    entries = store.list_entries_for(reptile.id)
    if not entries:
        print(f'No entries for {reptile.name} yet.')
        return

    print(f'{reptile.name} has {len(entries)} entries.')
    for e in entries:
        line = f' * {format_date(e.timestamp)}  {TYPE_LABELS[e.type]}'
        if e.notes:
            line += f' - {e.notes}'
        print(line)


def view_stats(store):
    print(' ******************     Stats     **************** ')

    reptile = selected_reptile(store)
    if not reptile:
        return

    stats = compute_stats(store.list_entries_for(reptile.id))
    if stats is None:
        print(f'No entries for {reptile.name} yet.')
        return

    print(f'Overview for {reptile.name}:')
    print(f'  Total entries: {stats.total_entries}')
    print(f'  Last activity: {format_date(stats.last_activity)}')
    for entry_type in EntryType:
        type_stats = stats.per_type[entry_type]
        last = format_date(type_stats.last) if type_stats.last else 'never'
        print(f'  {TYPE_LABELS[entry_type]}: {type_stats.count} (last: {last})')


"""
Return the selected Reptile, or print why there is none and return None.
"""
def selected_reptile(store):
    if not state.selected_reptile_id:
        error_msg('Add a reptile first.')
        return None

    reptile = store.get_reptile(state.selected_reptile_id)
    if not reptile:
        error_msg('The selected reptile no longer exists; please select another one.')
    return reptile


"""
Format a timestamp as 'd Month yyyy, HH:MM' in local time.
"""
def format_date(timestamp):
    local = timestamp.astimezone()
    return f"{local.day} {local.strftime('%B %Y, %H:%M')}"


"""
Exit the application by raising KeyboardInterrupt.

This is caught by program.main to terminate gracefully.
"""
def exit_app():
    print()
    print('bye')
    raise KeyboardInterrupt()


"""
Prompt for the next action, using the selected reptile's name as a prefix.

Returns:
    The normalized command string (lowercased and stripped).
"""
def get_action(store):
    text = '> '
    reptile = store.get_reptile(state.selected_reptile_id) if state.selected_reptile_id else None
    if reptile:
        text = f'{reptile.name}> '

    action = input(Fore.YELLOW + text + Fore.WHITE)
    return action.strip().lower()


def unknown_command():
    print("Sorry we didn't understand that command.")


def success_msg(text):
    print(Fore.LIGHTGREEN_EX + text + Fore.WHITE)


def error_msg(text):
    print(Fore.LIGHTRED_EX + text + Fore.WHITE)
