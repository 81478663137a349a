"""User registry service: registration API plus live presence over Socket.IO"""
