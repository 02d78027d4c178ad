from flask_socketio import join_room, leave_room, emit
from partyrank import socketio

LEADERBOARD_ROOM = 'leaderboard'


def game_room(game_id: str) -> str:
    return f"game:{game_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_leaderboard(data=None):
    join_room(LEADERBOARD_ROOM)
    emit('joined', {'room': LEADERBOARD_ROOM})


def handle_leave_leaderboard(data=None):
    leave_room(LEADERBOARD_ROOM)
    emit('left', {'room': LEADERBOARD_ROOM})


def handle_join_game(data):
    game_id = (data or {}).get('game')
    if not game_id:
        emit('error', {'message': 'game is required'})
        return
    room = game_room(game_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_game(data):
    game_id = (data or {}).get('game')
    if not game_id:
        emit('error', {'message': 'game is required'})
        return
    room = game_room(game_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


HANDLERS = {
    'connect': handle_connect,
    'join_leaderboard': handle_join_leaderboard,
    'leave_leaderboard': handle_leave_leaderboard,
    'join_game': handle_join_game,
    'leave_game': handle_leave_game,
    'ping': handle_ping,
}


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in HANDLERS.items():
            socketio.on_event(event, handler, namespace=namespace)
