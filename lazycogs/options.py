from lazycogs.util.debugging import dbg, set_debugging, unset_debugging


class CowOptions:
    def __init__(self, opts: "CowOptions" = None) -> None:
        if opts:
            self.debug = opts.debug
            self.verbose = opts.verbose
            self.collect_stats = opts.collect_stats
        else:
            self.debug = False
            self.verbose = False
            # count cell creations, duplications and destructions
            # in lazycogs.stats
            self.collect_stats = False

    def set_verbose(self) -> "CowOptions":
        self.debug = True
        self.verbose = True
        return self

    def __str__(self) -> str:
        return f"{self.__repr__()}\n" + "\n".join(
            f"  {k} = {v}" for k, v in self.__dict__.items()
        )


_options = CowOptions()


def get_options() -> CowOptions:
    return _options


def set_options(opts: CowOptions) -> CowOptions:
    """Install new options, return the previous ones"""
    global _options
    old = _options
    _options = opts
    if opts.debug or opts.verbose:
        set_debugging(opts.verbose)
        dbg(f"using options {opts}")
    else:
        unset_debugging()
    return old
