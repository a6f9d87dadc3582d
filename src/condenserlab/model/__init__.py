"""
The MODEL layer contains pure data structures.
It has NO knowledge of the GUI (Qt) or the network.
It deals with the circuit state, the observation table and the chat history.
"""
