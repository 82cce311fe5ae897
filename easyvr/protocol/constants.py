"""Wire constants of the EasyVR serial protocol.

Commands and status codes are lower-case ASCII letters (plus '~' for service
requests). Arguments occupy the separate range 0x40..0x60. Several commands
share a byte and are told apart by their first argument (-1 selects the
alternate meaning).
"""

# Commands
CMD_BREAK = ord('b')        # abort recognition or ping
CMD_SLEEP = ord('s')        # go to power down, wake mode <1>
CMD_KNOB = ord('k')         # set built-in recognition knob <1>
CMD_MIC_DIST = ord('k')     # set microphone (<1>=-1) distance <2>
CMD_LEVEL = ord('v')        # set custom recognition level <1>
CMD_VERIFY_RP = ord('v')    # verify messages (<1>=-1) with flags <2> (0=check, 1=fix)
CMD_LANGUAGE = ord('l')     # set built-in language <1>
CMD_LIPSYNC = ord('l')      # real-time lipsync (<1>=-1) threshold <2-3> timeout <4-5>
CMD_TIMEOUT = ord('o')      # set recognition timeout <1> seconds
CMD_RECOG_SI = ord('i')     # recognise built-in wordset <1>
CMD_TRAIN_SD = ord('t')     # train command at group <1> index <2>
CMD_TRAILING = ord('t')     # set trailing (<1>=-1) silence <2>
CMD_GROUP_SD = ord('g')     # insert command at group <1> index <2>
CMD_UNGROUP_SD = ord('u')   # remove command at group <1> index <2>
CMD_RECOG_SD = ord('d')     # recognise custom commands of group <1>
CMD_DUMP_RP = ord('d')      # dump message (<1>=-1) at index <2>
CMD_ERASE_SD = ord('e')     # erase training of command at group <1> index <2>
CMD_ERASE_RP = ord('e')     # erase message (<1>=-1) at index <2>
CMD_NAME_SD = ord('n')      # label command at group <1> index <2> length <3> name <4-n>
CMD_COUNT_SD = ord('c')     # command count of group <1>
CMD_DUMP_SD = ord('p')      # dump command at group <1> index <2>
CMD_PLAY_RP = ord('p')      # play message (<1>=-1) at index <2> flags <3>
CMD_MASK_SD = ord('m')      # mask of non-empty groups
CMD_RESETALL = ord('r')     # reset commands and messages, raw 'R'
CMD_RESET_SD = ord('r')     # reset commands only, raw 'D'
CMD_RESET_RP = ord('r')     # reset messages only, raw 'M'
CMD_RECORD_RP = ord('r')    # record message (<1>=-1) at index <2> type <3> timeout <4>
CMD_ID = ord('x')           # module identification
CMD_DELAY = ord('y')        # reply delay <1> (coarse scale)
CMD_BAUDRATE = ord('a')     # baud rate <1> (bit time divisor)
CMD_QUERY_IO = ord('q')     # configure, read or write pin <1> with config <2>
CMD_PLAY_SX = ord('w')      # play sound <1-2> at volume <3>
CMD_PLAY_DTMF = ord('w')    # play (<1>=-1) phone tone <2> for duration <3>
CMD_DUMP_SX = ord('h')      # dump sound table
CMD_DUMP_SI = ord('z')      # dump grammar <1> (or grammar count if -1)
CMD_SEND_SN = ord('j')      # send token with bits <1> index <2-3> at time <4-5>
CMD_RECV_SN = ord('f')      # detect token with bits <1> rejection <2> timeout <3-4>
CMD_FAST_SD = ord('f')      # set latency (<1>=-1) mode <2>
CMD_SERVICE = ord('~')      # service request <1>

# Service sub-commands (sent as arguments)
SVC_EXPORT_SD = ord('X')
SVC_IMPORT_SD = ord('I')
SVC_VERIFY_SD = ord('V')
SVC_DUMP_SD = ord('D')

# Raw selectors following CMD_RESETALL
RESET_ALL = ord('R')
RESET_COMMANDS = ord('D')
RESET_MESSAGES = ord('M')

# Status codes
STS_MASK = ord('k')         # group mask <1-8>
STS_COUNT = ord('c')        # count <1>
STS_AWAKEN = ord('w')       # back from power down
STS_DATA = ord('d')         # training <1>, value <2>, label <3-35>
STS_ERROR = ord('e')        # error code <1-2>
STS_INVALID = ord('v')      # invalid command or argument
STS_TIMEOUT = ord('t')      # timeout expired
STS_LIPSYNC = ord('l')      # lipsync stream follows
STS_INTERR = ord('i')       # back from an interrupted operation
STS_SUCCESS = ord('o')      # no errors
STS_RESULT = ord('r')       # recognised custom command <1>
STS_SIMILAR = ord('s')      # recognised built-in word <1>
STS_OUT_OF_MEM = ord('m')   # no more room for commands
STS_ID = ord('x')           # module id <1>
STS_PIN = ord('p')          # pin state <1>
STS_TABLE_SX = ord('h')     # sound count <1-2>, label <3-35>
STS_GRAMMAR = ord('z')      # grammar flags <1>, word count <2>
STS_TOKEN = ord('f')        # token <1-2>
STS_MESSAGE = ord('g')      # message type <1>, length <2-13>
STS_SERVICE = ord('~')      # service reply <1>

# Arguments span ARG_MIN (-1) to ARG_MAX (31)
ARG_MIN = 0x40
ARG_MAX = 0x60
ARG_ZERO = 0x41
ARG_ACK = 0x20              # request the next argument

# Label escapes
LABEL_DIGIT_ESCAPE = ord('^')
LABEL_FILLER = ord('_')

# Timeout classes (seconds)
DEF_TIMEOUT = 0.5
STORAGE_TIMEOUT = 0.5
WAKE_TIMEOUT = 0.2
PLAY_TIMEOUT = 5.0
TOKEN_TIMEOUT = 1.5
MAINTENANCE_TIMEOUT = 25.0
NO_TIMEOUT = 0
INFINITE = None

# Payload sizes
COMMAND_DATA_SIZE = 258
GROUP_MASK_BYTES = 4
MESSAGE_LENGTH_BYTES = 6
DETECT_ATTEMPTS = 5
