"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .cursor import Direction
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Moves the cursor one step; never modifies the document."""

    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.cursor.move_cursor(editor.buffer, self.direction)
        editor.cursor.change_offset()
        return False


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        changed = self._edit(editor, key_event)
        editor.cursor.change_offset()
        return changed

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit; return whether the document changed."""


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        changed = False
        for char in key_event.value:
            # Filter out control characters; Tab expands in the buffer
            if ord(char) >= 32 or char == '\t':
                editor.buffer.insert_char(char, editor.cursor)
                changed = True
        return changed


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.new_line(editor.cursor)
        return True


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        x, y = editor.cursor.get_position()
        editor.buffer.delete_char(editor.cursor)
        return x > 0 or y > 0


class SystemCommand(EditorCommand):
    """Base class for save/load/find/quit; these open prompts."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_save_prompt()


class LoadCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_load_prompt()


class FindCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_search()


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_quit_confirm()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        # Movement
        self.register((KeyType.SPECIAL, 'up'), MovementCommand(Direction.UP))
        self.register((KeyType.SPECIAL, 'down'), MovementCommand(Direction.DOWN))
        self.register((KeyType.SPECIAL, 'left'), MovementCommand(Direction.LEFT))
        self.register((KeyType.SPECIAL, 'right'), MovementCommand(Direction.RIGHT))

        # Editing
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())

        # System
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'l'), LoadCommand())
        self.register((KeyType.CTRL, 'f'), FindCommand())
        self.register((KeyType.CTRL, 'c'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Unbound regular keys are text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
