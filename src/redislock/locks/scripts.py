"""Lua scripts executed atomically by Redis.

KEYS[1] is the namespaced lock key, ARGV[1] the handle token. Redis runs
each script without interleaving other commands, which is what makes the
compare-then-write sequences safe across processes.
"""

# ARGV[2]: lease in milliseconds, tolerance included.
# Replies "OK" when the caller owns the key afterwards, nil otherwise.
ACQUIRE_SCRIPT = """\
if redis.call("GET", KEYS[1]) == ARGV[1] then
    redis.call("SET", KEYS[1], ARGV[1], "PX", ARGV[2])
    return "OK"
else
    return redis.call("SET", KEYS[1], ARGV[1], "NX", "PX", ARGV[2])
end
"""

# Replies 1 when the key was deleted, 0 when the caller was not the owner.
RELEASE_SCRIPT = """\
if redis.call("GET", KEYS[1]) == ARGV[1] then
    return redis.call("DEL", KEYS[1])
else
    return 0
end
"""
