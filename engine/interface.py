from typing import Callable

from engine.undo import UndoRecord


class Interface:

    def __init__(self):
        self.controller = None

    def on_start(self):
        pass

    def on_event(self, record: UndoRecord, done: Callable[[], None]):
        """
        Invoked when a match or a draw has been committed.
        :param record: the undo record of the move, carries the moved card and positions
        :param done: must be called once the visible effect has settled; the
            controller refuses new commands until then
        """
        self.notify_redraw()
        done()

    def on_undo_event(self, record: UndoRecord, done: Callable[[], None]):
        """
        Invoked when a move has been undone.
        :param record: the consumed record
        :param done: see ``on_event``
        """
        self.notify_redraw()
        done()

    def notify_redraw(self):
        pass

    def on_win(self):
        pass
