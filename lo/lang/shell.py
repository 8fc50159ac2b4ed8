"""Handles interactive/command-line mode for the lo interpreter. Uses cmd as backend."""

import cmd

from lo.lang.session import Session


class Shell(cmd.Cmd):
    """lo interpreter shell. Each line is one full pipeline run against the same Session."""
    intro = "lo interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False  # errors are reported, the loop goes on

    def default(self, line):
        """Executes arbitrary lo source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run(line, Session.SH_FILE)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            self.default(f"help {arg}")
            return
        print("Welcome to the lo interpreter!\n\n"
              "lo is a small dynamically-typed scripting language. Statements end with ';'.\n"
              "Try it out by typing 'var x = 1;'. This binds 1 to the name 'x'. Next, try\n"
              "typing 'x = x + 1; print x;'. Variables live until you leave the shell.\n\n"
              "Values are numbers, strings (\"...\"), true, false and nil.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        if arg:
            # 'EOF = 3;' is lo source, not end of input
            self.default(f"EOF {arg}")
            return False
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            # 'exit = 3;' is an assignment, not a command
            self.default(f"exit {arg}")
            return False
        print("Exiting lo...")
        return True

    do_quit = do_exit
