# Client -> server
ROOM_CREATE = "room:create"
ROOM_JOIN = "room:join"
ROOM_STATE = "room:state"
ROOM_LEAVE = "room:leave"
GAME_START = "game:start"
GAME_VOTE = "game:vote"

# Server -> client
# ROOM_STATE is also pushed to each member with their own filtered view.
GAME_ROUND = "game:round"
GAME_OVER = "game:over"
