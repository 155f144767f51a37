"""XDR codec and wire types for ONC RPC, the port mapper, MOUNT3 and NFSv3."""

__version__ = "0.5.0"

__all__ = ["errors", "xdr", "rpc", "mount", "portmap", "nfs3_base", "nfs3_procs"]